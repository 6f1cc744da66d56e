"""Kernel facts."""

from ..facts.models import ResolvedFact
from ..resolvers import ResolverRegistry
from .base import FactDefinition


def kernel_version(release: str | None) -> str | None:
    """Numeric part of a kernel release: '6.1.0-13-amd64' -> '6.1.0'."""
    if not release:
        return None
    return release.split("-")[0]


def kernel_major_version(version: str | None) -> str | None:
    """First two components of a kernel version: '6.1.0' -> '6.1'."""
    if not version:
        return None
    return ".".join(version.split(".")[:2])


class Kernel(FactDefinition):
    @property
    def name(self) -> str:
        return "kernel"

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        return [ResolvedFact(self.name, registry.resolve("uname", "kernel"))]


class Kernelrelease(FactDefinition):
    @property
    def name(self) -> str:
        return "kernelrelease"

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        return [ResolvedFact(self.name, registry.resolve("uname", "kernelrelease"))]


class WindowsKernelrelease(Kernelrelease):
    """On Windows the kernel release is the build version (e.g. '10.0.19045')."""

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        return [ResolvedFact(self.name, registry.resolve("uname", "kernelversion"))]


class Kernelversion(FactDefinition):
    @property
    def name(self) -> str:
        return "kernelversion"

    def _version(self, registry: ResolverRegistry) -> str | None:
        if registry.platform == "windows":
            return registry.resolve("uname", "kernelversion")
        return kernel_version(registry.resolve("uname", "kernelrelease"))

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        return [ResolvedFact(self.name, self._version(registry))]


class Kernelmajversion(Kernelversion):
    @property
    def name(self) -> str:
        return "kernelmajversion"

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        return [ResolvedFact(self.name, kernel_major_version(self._version(registry)))]
