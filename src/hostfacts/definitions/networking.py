"""Networking name facts."""

from ..facts.models import FactKind, ResolvedFact
from ..resolvers import ResolverRegistry
from .base import FactDefinition


class _HostnameFact(FactDefinition):
    """A networking.<key> fact with a flat legacy alias of the same key."""

    key = ""

    @property
    def name(self) -> str:
        return f"networking.{self.key}"

    @property
    def aliases(self) -> list[str]:
        return [self.key]

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        fact_value = registry.resolve("hostname", self.key)
        return [
            ResolvedFact(self.name, fact_value),
            ResolvedFact(self.key, fact_value, FactKind.LEGACY),
        ]


class NetworkingHostname(_HostnameFact):
    key = "hostname"


class NetworkingDomain(_HostnameFact):
    key = "domain"


class NetworkingFqdn(_HostnameFact):
    key = "fqdn"
