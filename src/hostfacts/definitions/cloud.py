"""Virtualization and cloud facts."""

from ..facts.models import ResolvedFact
from ..resolvers import ResolverRegistry
from .base import FactDefinition


class Virtual(FactDefinition):
    @property
    def name(self) -> str:
        return "virtual"

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        return [ResolvedFact(self.name, registry.resolve("virtual", "vm"))]


class IsVirtual(FactDefinition):
    @property
    def name(self) -> str:
        return "is_virtual"

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        return [ResolvedFact(self.name, registry.resolve("virtual", "is_virtual"))]


class AzMetadata(FactDefinition):
    """Azure instance metadata, only queried on Hyper-V guests."""

    @property
    def name(self) -> str:
        return "az_metadata"

    def _azure_hypervisor(self, registry: ResolverRegistry) -> bool:
        return registry.resolve("virtual", "vm") == "hyperv"

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        if not self._azure_hypervisor(registry):
            return [ResolvedFact(self.name, None)]

        fact_value = registry.resolve("az", "metadata")
        return [ResolvedFact(self.name, fact_value or None)]
