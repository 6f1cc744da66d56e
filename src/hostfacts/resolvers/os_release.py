"""Distribution identity from /etc/os-release."""

import logging
import shlex
from pathlib import Path

from .base import Resolver

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")


def parse_os_release(content: str) -> dict[str, str]:
    """Parse ``KEY="value"`` lines of an os-release file."""
    data: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            parts = shlex.split(raw)
        except ValueError:
            continue
        data[key.strip()] = parts[0] if parts else ""
    return data


class OsReleaseResolver(Resolver):
    """Answers id, name, pretty_name, version_id and id_like."""

    keys = ("id", "name", "pretty_name", "version_id", "id_like")

    def __init__(self, path: Path = OS_RELEASE_PATH) -> None:
        super().__init__()
        self._path = path

    @property
    def name(self) -> str:
        return "os_release"

    def _post_resolve(self, key: str) -> None:
        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as e:
            logger.debug("Cannot read %s: %s", self._path, e)
            return

        data = parse_os_release(content)
        self._fact_list.update(
            id=data.get("ID") or None,
            name=data.get("NAME") or None,
            pretty_name=data.get("PRETTY_NAME") or None,
            version_id=data.get("VERSION_ID") or None,
            id_like=data.get("ID_LIKE") or None,
        )
