"""Platform resolvers and their registry."""

from .az import AzResolver
from .base import Resolver
from .hostname import HostnameResolver
from .memory import MemoryResolver
from .os_release import OsReleaseResolver
from .registry import ResolverRegistry, default_registry, detect_platform
from .uname import UnameResolver
from .virtual import VirtualResolver

__all__ = [
    "AzResolver",
    "HostnameResolver",
    "MemoryResolver",
    "OsReleaseResolver",
    "Resolver",
    "ResolverRegistry",
    "UnameResolver",
    "VirtualResolver",
    "default_registry",
    "detect_platform",
]
