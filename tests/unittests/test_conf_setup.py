"""
Unit tests for ConfigLoader and the service factory.
"""

import os
import tempfile
import textwrap
import unittest
from unittest.mock import patch

from eventfilter.conf import ConfigLoader
from eventfilter.exceptions import ImproperlyConfigured
from eventfilter.filters import PatternFilter
from eventfilter.mechanisms import ChannelFilteringMechanism, NullFilteringMechanism
from eventfilter.mechanisms.redis import RedisFilteringMechanism
from eventfilter.channel import EventChannel
from eventfilter.setup import create_event_filter_service


class ConfigTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        patcher = patch.dict(
            os.environ, {"EVENT_FILTER_CONFIG_DIR": self.tmpdir.name}, clear=False
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop("EVENT_FILTER_CONFIG", None)

    def write_settings(self, body, name="custom_settings.py"):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w") as fd:
            fd.write(textwrap.dedent(body))
        return path


class TestConfigLoader(ConfigTestCase):
    """Tests for settings discovery and lookup."""

    def test_defaults(self):
        """Test the packaged defaults are loaded."""
        config = ConfigLoader()
        self.assertEqual(
            config.EVENT_FILTER_MECHANISM,
            "eventfilter.mechanisms.channel.ChannelFilteringMechanism",
        )
        self.assertEqual(config.EVENT_FILTER_RULE, {"types": ["event"]})
        self.assertFalse(config.EVENT_FILTER_ENABLED)

    def test_explicit_file_overrides_defaults(self):
        """Test an explicit settings file overrides defaults, upper-casing keys."""
        path = self.write_settings(
            """
            EVENT_FILTER_ENABLED = True
            event_filter_redis_key = "custom:key"
            """
        )
        config = ConfigLoader(config_file=path)
        self.assertTrue(config.EVENT_FILTER_ENABLED)
        self.assertEqual(config.EVENT_FILTER_REDIS_KEY, "custom:key")

    def test_settings_file_in_config_dir(self):
        """Test settings.py in the config directory is picked up."""
        self.write_settings('REDIS_URL = "redis://dir:6379/0"\n', name="settings.py")
        config = ConfigLoader()
        self.assertEqual(config.REDIS_URL, "redis://dir:6379/0")

    def test_env_config_file(self):
        """Test the file named by EVENT_FILTER_CONFIG is loaded."""
        path = self.write_settings('REDIS_URL = "redis://env:6379/0"\n')
        with patch.dict(os.environ, {"EVENT_FILTER_CONFIG": path}):
            config = ConfigLoader()
        self.assertEqual(config.REDIS_URL, "redis://env:6379/0")

    def test_missing_file_keeps_defaults(self):
        """Test a missing settings file leaves the defaults in place."""
        config = ConfigLoader(config_file=os.path.join(self.tmpdir.name, "nope.py"))
        self.assertFalse(config.EVENT_FILTER_ENABLED)

    def test_missing_key(self):
        """Test an unknown key raises AttributeError."""
        config = ConfigLoader()
        with self.assertRaises(AttributeError):
            config.get("NOT_A_SETTING")

    def test_environment_fallback(self):
        """Test unknown keys fall back to environment variables."""
        config = ConfigLoader()
        with patch.dict(os.environ, {"EVENT_FILTER_EXTRA": "yes"}):
            self.assertEqual(config.EVENT_FILTER_EXTRA, "yes")

    def test_add(self):
        """Test add overrides a setting."""
        config = ConfigLoader()
        config.add("EVENT_FILTER_ENABLED", True)
        self.assertTrue(config.EVENT_FILTER_ENABLED)


class TestCreateEventFilterService(ConfigTestCase):
    """Tests for building the service from settings."""

    def test_default_service_filters_channel(self):
        """Test the default service filters the given channel and is not started."""
        channel = EventChannel()
        service = create_event_filter_service(ConfigLoader(), channel=channel)

        self.assertIsInstance(service.mechanism, ChannelFilteringMechanism)
        self.assertIs(service.mechanism.channel, channel)
        self.assertFalse(service.is_started())
        self.assertFalse(service.is_enabled())

    def test_rule_and_initial_flag_from_settings(self):
        """Test the rule and initial flag come from settings."""
        path = self.write_settings(
            """
            EVENT_FILTER_ENABLED = True
            EVENT_FILTER_RULE = {"pattern": {"name": "secret"}}
            """
        )
        service = create_event_filter_service(ConfigLoader(config_file=path))

        self.assertTrue(service.is_enabled())
        self.assertIsInstance(service.mechanism.rule, PatternFilter)

        service.start()
        self.assertTrue(service.mechanism.active)

    def test_null_mechanism(self):
        """Test the mechanism class is taken from settings."""
        path = self.write_settings(
            'EVENT_FILTER_MECHANISM = "eventfilter.mechanisms.null.NullFilteringMechanism"\n'
        )
        service = create_event_filter_service(ConfigLoader(config_file=path))
        self.assertIsInstance(service.mechanism, NullFilteringMechanism)

    def test_redis_mechanism_uses_redis_settings(self):
        """Test the Redis mechanism receives the Redis settings."""
        path = self.write_settings(
            """
            EVENT_FILTER_MECHANISM = "eventfilter.mechanisms.redis.RedisFilteringMechanism"
            REDIS_URL = "redis://cache:6379/1"
            EVENT_FILTER_REDIS_KEY = "app:filter"
            """
        )
        service = create_event_filter_service(ConfigLoader(config_file=path))

        self.assertIsInstance(service.mechanism, RedisFilteringMechanism)
        self.assertEqual(service.mechanism.url, "redis://cache:6379/1")
        self.assertEqual(service.mechanism.key, "app:filter")

    def test_invalid_mechanism_path(self):
        """Test a bad mechanism path raises ImproperlyConfigured."""
        config = ConfigLoader()
        for path in ("eventfilter.nope.Mechanism", "eventfilter.state.FilterState"):
            with self.subTest(path=path):
                config.add("EVENT_FILTER_MECHANISM", path)
                with self.assertRaises(ImproperlyConfigured):
                    create_event_filter_service(config)

    def test_invalid_mechanism_options(self):
        """Test bad mechanism options raise ImproperlyConfigured."""
        config = ConfigLoader()
        config.add("EVENT_FILTER_MECHANISM_OPTIONS", {"bogus": 1})
        with self.assertRaises(ImproperlyConfigured):
            create_event_filter_service(config)


if __name__ == "__main__":
    unittest.main()
