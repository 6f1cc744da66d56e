"""Data models for resolved facts."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class FactKind(str, Enum):
    """How a fact is exposed and merged.

    Legacy facts keep historical flat names and are hidden unless asked for.
    Custom facts come from user-supplied external sources.
    """

    CORE = "core"
    LEGACY = "legacy"
    CUSTOM = "custom"
    CUSTOM_LEGACY = "custom_legacy"


def normalize_key(key: Any) -> str:
    """Return the string form of a mapping key."""
    if isinstance(key, str):
        return key
    if isinstance(key, Enum):
        return key.value if isinstance(key.value, str) else key.name
    if isinstance(key, bytes):
        return key.decode("utf-8", errors="replace")
    return str(key)


def normalize_value(value: Any) -> Any:
    """Normalize a fact value: string keys everywhere, lists for sequences."""
    if isinstance(value, dict):
        return {normalize_key(k): normalize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_value(v) for v in value]
    return value


@dataclass(frozen=True)
class ResolvedFact:
    """A named fact value produced by a definition.

    Attributes:
        name: Dotted address of the fact (e.g. 'os.release.major').
        value: Scalar, list or mapping; None means the fact does not apply.
        kind: Visibility and merge policy.
        user_query: The query that caused the fact to be resolved, if any.
        filter_tokens: Segments navigated into ``value`` by the fact filter.
    """

    name: str
    value: Any = None
    kind: FactKind = FactKind.CORE
    user_query: str = ""
    filter_tokens: tuple[str | int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", FactKind(self.kind))
        object.__setattr__(self, "value", normalize_value(self.value))
        object.__setattr__(self, "filter_tokens", tuple(self.filter_tokens))

    @property
    def is_legacy(self) -> bool:
        return self.kind in (FactKind.LEGACY, FactKind.CUSTOM_LEGACY)

    @property
    def is_custom(self) -> bool:
        return self.kind in (FactKind.CUSTOM, FactKind.CUSTOM_LEGACY)

    def with_value(self, value: Any) -> "ResolvedFact":
        """Return a copy of this fact holding ``value``."""
        return replace(self, value=value)

    def with_query(
        self, user_query: str, filter_tokens: list[str | int] | tuple[str | int, ...] = ()
    ) -> "ResolvedFact":
        """Return a copy of this fact tied to the query that requested it."""
        return replace(self, user_query=user_query, filter_tokens=tuple(filter_tokens))
