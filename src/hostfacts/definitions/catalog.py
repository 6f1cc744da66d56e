"""Fact definitions available on each platform."""

from .base import FactDefinition
from .cloud import AzMetadata, IsVirtual, Virtual
from .kernel import Kernel, Kernelmajversion, Kernelrelease, Kernelversion, WindowsKernelrelease
from .memory import (
    MemorySwapTotalBytes,
    MemorySystemAvailable,
    MemorySystemAvailableBytes,
    MemorySystemTotalBytes,
)
from .networking import NetworkingDomain, NetworkingFqdn, NetworkingHostname
from .operating_system import OsArchitecture, OsHardware, OsName, OsRelease


def load_definitions(platform_name: str) -> list[FactDefinition]:
    """Return the definitions that can resolve on ``platform_name``."""
    definitions: list[FactDefinition] = [
        Kernel(),
        WindowsKernelrelease() if platform_name == "windows" else Kernelrelease(),
        Kernelversion(),
        Kernelmajversion(),
        OsName(),
        OsRelease(),
        OsArchitecture(),
        OsHardware(),
        NetworkingHostname(),
        NetworkingDomain(),
        NetworkingFqdn(),
    ]

    if platform_name == "linux":
        definitions += [
            MemorySystemTotalBytes(),
            MemorySystemAvailableBytes(),
            MemorySystemAvailable(),
            MemorySwapTotalBytes(),
            Virtual(),
            IsVirtual(),
            AzMetadata(),
        ]

    return definitions
