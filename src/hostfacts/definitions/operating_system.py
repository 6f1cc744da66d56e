"""Operating system facts."""

from ..facts.models import FactKind, ResolvedFact
from ..resolvers import ResolverRegistry
from .base import FactDefinition
from .kernel import kernel_version


def release_hash(full: str | None) -> dict[str, str] | None:
    """Split a release string into full, major and minor parts."""
    if not full:
        return None

    parts = full.split(".")
    release = {"full": full, "major": parts[0]}
    if len(parts) > 1:
        release["minor"] = parts[1]
    return release


class OsName(FactDefinition):
    @property
    def name(self) -> str:
        return "os.name"

    @property
    def aliases(self) -> list[str]:
        return ["operatingsystem"]

    def _os_name(self, registry: ResolverRegistry) -> str | None:
        if registry.platform == "linux":
            distro = registry.resolve("os_release", "id")
            if distro:
                return distro.capitalize()
        return registry.resolve("uname", "kernel")

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        fact_value = self._os_name(registry)
        return [
            ResolvedFact(self.name, fact_value),
            ResolvedFact("operatingsystem", fact_value, FactKind.LEGACY),
        ]


class OsRelease(FactDefinition):
    @property
    def name(self) -> str:
        return "os.release"

    @property
    def aliases(self) -> list[str]:
        return ["operatingsystemmajrelease", "operatingsystemrelease"]

    def _full(self, registry: ResolverRegistry) -> str | None:
        if registry.platform == "linux":
            version_id = registry.resolve("os_release", "version_id")
            if version_id:
                return version_id
        if registry.platform == "windows":
            return registry.resolve("uname", "kernelversion")
        return kernel_version(registry.resolve("uname", "kernelrelease"))

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        fact_value = release_hash(self._full(registry))
        return [
            ResolvedFact(self.name, fact_value),
            ResolvedFact(
                "operatingsystemmajrelease",
                fact_value["major"] if fact_value else None,
                FactKind.LEGACY,
            ),
            ResolvedFact(
                "operatingsystemrelease",
                fact_value["full"] if fact_value else None,
                FactKind.LEGACY,
            ),
        ]


class OsArchitecture(FactDefinition):
    @property
    def name(self) -> str:
        return "os.architecture"

    @property
    def aliases(self) -> list[str]:
        return ["architecture"]

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        fact_value = registry.resolve("uname", "hardware")
        return [
            ResolvedFact(self.name, fact_value),
            ResolvedFact("architecture", fact_value, FactKind.LEGACY),
        ]


class OsHardware(FactDefinition):
    @property
    def name(self) -> str:
        return "os.hardware"

    @property
    def aliases(self) -> list[str]:
        return ["hardwaremodel"]

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        fact_value = registry.resolve("uname", "hardware")
        return [
            ResolvedFact(self.name, fact_value),
            ResolvedFact("hardwaremodel", fact_value, FactKind.LEGACY),
        ]
