"""Base fact definition interface."""

from abc import ABC, abstractmethod

from ..facts.models import ResolvedFact
from ..resolvers import ResolverRegistry


class FactDefinition(ABC):
    """Turns resolver values into resolved facts.

    A definition produces one fact per name it owns: its structured name and
    any legacy aliases. Facts that do not apply on this host carry a None
    value rather than being left out.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Structured fact name."""
        ...

    @property
    def aliases(self) -> list[str]:
        """Legacy flat names produced alongside the structured fact."""
        return []

    @property
    def names(self) -> list[str]:
        return [self.name, *self.aliases]

    @abstractmethod
    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        """Resolve every fact this definition owns."""
        ...
