import typing

from .base import EventFilterBase
from .composite import CompositeFilter
from .pattern import PatternFilter
from .type import TypeFilter
from ..exceptions import ImproperlyConfigured

RuleSpec = typing.Union[EventFilterBase, typing.Dict[str, typing.Any]]


def build_filter(spec: RuleSpec) -> EventFilterBase:
    """
    Build a filter rule from its settings representation.

    Accepted shapes:
        {"types": ["event", ...]}
        {"pattern": {"key": "value"}}
        {"all": [<spec>, ...]}
        {"any": [<spec>, ...]}
    A ready-made EventFilterBase instance is returned unchanged.
    Raises:
        ImproperlyConfigured: the rule is not one of the shapes above.
    """
    if isinstance(spec, EventFilterBase):
        return spec

    if not isinstance(spec, dict) or len(spec) != 1:
        raise ImproperlyConfigured(
            f"Filter rule must be a single-key dict, got {spec!r}",
            code="invalid_rule",
        )

    (kind, value), = spec.items()
    if kind == "types":
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)) or not all(
            isinstance(item, str) for item in value
        ):
            raise ImproperlyConfigured(
                "'types' rule expects an event type or a list of event types",
                code="invalid_rule",
            )
        return TypeFilter(value)
    if kind == "pattern":
        if not isinstance(value, dict):
            raise ImproperlyConfigured(
                "'pattern' rule expects a mapping", code="invalid_rule"
            )
        return PatternFilter(value)
    if kind in ("all", "any"):
        if not isinstance(value, (list, tuple)):
            raise ImproperlyConfigured(
                f"'{kind}' rule expects a list of rules", code="invalid_rule"
            )
        return CompositeFilter(
            [build_filter(item) for item in value],
            operator="AND" if kind == "all" else "OR",
        )

    raise ImproperlyConfigured(f"Unknown filter rule '{kind}'", code="invalid_rule")
