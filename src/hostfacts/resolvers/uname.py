"""Kernel and hardware names from uname."""

import platform

from .base import Resolver


class UnameResolver(Resolver):
    """Answers kernel, kernelrelease, kernelversion, hardware and nodename."""

    keys = ("kernel", "kernelrelease", "kernelversion", "hardware", "nodename")

    @property
    def name(self) -> str:
        return "uname"

    def _post_resolve(self, key: str) -> None:
        uname = platform.uname()
        values = {
            "kernel": uname.system,
            "kernelrelease": uname.release,
            "kernelversion": uname.version,
            "hardware": uname.machine,
            "nodename": uname.node,
        }
        # platform.uname() reports unknown fields as empty strings
        self._fact_list.update({k: v or None for k, v in values.items()})
