"""Linux memory facts."""

from ..facts.models import FactKind, ResolvedFact
from ..facts.units import bytes_to_human_readable, bytes_to_mb
from ..resolvers import ResolverRegistry
from .base import FactDefinition


class MemorySystemTotalBytes(FactDefinition):
    @property
    def name(self) -> str:
        return "memory.system.total_bytes"

    @property
    def aliases(self) -> list[str]:
        return ["memorysize_mb"]

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        fact_value = registry.resolve("memory", "total")
        return [
            ResolvedFact(self.name, fact_value),
            ResolvedFact("memorysize_mb", bytes_to_mb(fact_value), FactKind.LEGACY),
        ]


class MemorySystemAvailableBytes(FactDefinition):
    @property
    def name(self) -> str:
        return "memory.system.available_bytes"

    @property
    def aliases(self) -> list[str]:
        return ["memoryfree_mb"]

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        fact_value = registry.resolve("memory", "memfree")
        return [
            ResolvedFact(self.name, fact_value),
            ResolvedFact("memoryfree_mb", bytes_to_mb(fact_value), FactKind.LEGACY),
        ]


class MemorySystemAvailable(FactDefinition):
    @property
    def name(self) -> str:
        return "memory.system.available"

    @property
    def aliases(self) -> list[str]:
        return ["memoryfree"]

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        fact_value = bytes_to_human_readable(registry.resolve("memory", "memfree"))
        return [
            ResolvedFact(self.name, fact_value),
            ResolvedFact("memoryfree", fact_value, FactKind.LEGACY),
        ]


class MemorySwapTotalBytes(FactDefinition):
    @property
    def name(self) -> str:
        return "memory.swap.total_bytes"

    @property
    def aliases(self) -> list[str]:
        return ["swapsize_mb"]

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        fact_value = registry.resolve("memory", "swap_total")
        return [
            ResolvedFact(self.name, fact_value),
            ResolvedFact("swapsize_mb", bytes_to_mb(fact_value), FactKind.LEGACY),
        ]
