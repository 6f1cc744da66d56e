"""Resolver registry for platform probes."""

import platform
from typing import Any

from .az import AzResolver
from .base import Resolver
from .hostname import HostnameResolver
from .memory import MemoryResolver
from .os_release import OsReleaseResolver
from .uname import UnameResolver
from .virtual import VirtualResolver


def detect_platform() -> str:
    """Return the running platform: 'linux', 'darwin', 'windows' or another system name."""
    return platform.system().lower() or "unknown"


class ResolverRegistry:
    """Registry of resolvers shared by every definition in a process.

    The registry owns the resolver caches, so its lifetime is the cache
    lifetime.
    """

    def __init__(self, platform_name: str | None = None) -> None:
        self.platform = platform_name or detect_platform()
        self._resolvers: dict[str, Resolver] = {}

    def register(self, resolver: Resolver) -> None:
        """Register a resolver."""
        if resolver.name in self._resolvers:
            raise ValueError(f"Resolver '{resolver.name}' already registered")
        self._resolvers[resolver.name] = resolver

    def unregister(self, name: str) -> None:
        """Unregister a resolver by name."""
        if name in self._resolvers:
            del self._resolvers[name]

    def get(self, name: str) -> Resolver | None:
        """Get a resolver by name."""
        return self._resolvers.get(name)

    def list_resolvers(self) -> list[str]:
        """List all registered resolver names."""
        return list(self._resolvers.keys())

    def resolve(self, resolver_name: str, key: str) -> Any:
        """Resolve ``key`` with the named resolver."""
        resolver = self._resolvers.get(resolver_name)
        if resolver is None:
            raise KeyError(f"Unknown resolver: {resolver_name}")
        return resolver.resolve(key)


def default_registry(
    platform_name: str | None = None,
    metadata_timeout: float = 0.6,
) -> ResolverRegistry:
    """Create the registry of resolvers available on ``platform_name``."""
    registry = ResolverRegistry(platform_name)
    registry.register(UnameResolver())
    registry.register(HostnameResolver())

    if registry.platform == "linux":
        registry.register(MemoryResolver())
        registry.register(OsReleaseResolver())
        registry.register(VirtualResolver())
        registry.register(AzResolver(timeout=metadata_timeout))

    return registry
