"""Hypervisor detection from DMI data."""

import logging
from pathlib import Path

from .base import Resolver

logger = logging.getLogger(__name__)

DMI_PATH = Path("/sys/class/dmi/id")

# (substring of sys_vendor or product_name, hypervisor)
HYPERVISORS = [
    ("Microsoft Corporation Virtual Machine", "hyperv"),
    ("VMware", "vmware"),
    ("VirtualBox", "virtualbox"),
    ("innotek", "virtualbox"),
    ("QEMU", "kvm"),
    ("KVM", "kvm"),
    ("Xen", "xenhvm"),
    ("Amazon EC2", "kvm"),
    ("Google Compute Engine", "gce"),
    ("OpenStack", "openstack"),
]


def detect_hypervisor(sys_vendor: str, product_name: str) -> str:
    """Map DMI vendor and product strings to a hypervisor name."""
    combined = f"{sys_vendor} {product_name}"
    for marker, hypervisor in HYPERVISORS:
        if marker in combined:
            return hypervisor
    return "physical"


class VirtualResolver(Resolver):
    """Answers vm (hypervisor name) and is_virtual."""

    keys = ("vm", "is_virtual")

    def __init__(self, dmi_path: Path = DMI_PATH) -> None:
        super().__init__()
        self._dmi_path = dmi_path

    @property
    def name(self) -> str:
        return "virtual"

    def _read(self, filename: str) -> str | None:
        try:
            return (self._dmi_path / filename).read_text(encoding="utf-8").strip()
        except OSError as e:
            logger.debug("Cannot read DMI %s: %s", filename, e)
            return None

    def _post_resolve(self, key: str) -> None:
        sys_vendor = self._read("sys_vendor")
        product_name = self._read("product_name")
        if sys_vendor is None and product_name is None:
            return

        vm = detect_hypervisor(sys_vendor or "", product_name or "")
        self._fact_list.update(vm=vm, is_virtual=vm != "physical")
