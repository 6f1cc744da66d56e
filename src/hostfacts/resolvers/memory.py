"""System memory from /proc/meminfo."""

import logging
from pathlib import Path

from .base import Resolver

logger = logging.getLogger(__name__)

MEMINFO_PATH = Path("/proc/meminfo")


def parse_meminfo(content: str) -> dict[str, int]:
    """Parse meminfo lines like ``MemTotal:  16314276 kB`` into byte counts."""
    info: dict[str, int] = {}
    for line in content.splitlines():
        parts = line.split()
        if len(parts) < 2 or not parts[0].endswith(":"):
            continue
        try:
            amount = int(parts[1])
        except ValueError:
            continue
        if len(parts) > 2 and parts[2].lower() == "kb":
            amount *= 1024
        info[parts[0][:-1]] = amount
    return info


class MemoryResolver(Resolver):
    """Answers total, memfree, swap_total and swap_free, in bytes."""

    keys = ("total", "memfree", "swap_total", "swap_free")

    def __init__(self, meminfo_path: Path = MEMINFO_PATH) -> None:
        super().__init__()
        self._meminfo_path = meminfo_path

    @property
    def name(self) -> str:
        return "memory"

    def _post_resolve(self, key: str) -> None:
        try:
            content = self._meminfo_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.debug("Cannot read %s: %s", self._meminfo_path, e)
            return

        info = parse_meminfo(content)
        if "MemAvailable" in info:
            memfree = info["MemAvailable"]
        elif "MemFree" in info:
            memfree = info["MemFree"] + info.get("Buffers", 0) + info.get("Cached", 0)
        else:
            memfree = None

        self._fact_list.update(
            total=info.get("MemTotal"),
            memfree=memfree,
            swap_total=info.get("SwapTotal"),
            swap_free=info.get("SwapFree"),
        )
