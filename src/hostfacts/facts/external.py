"""Load user-supplied external facts from fact directories.

Each directory may hold:
- ``*.json``: an object whose top-level keys are fact names,
- ``*.yaml`` / ``*.yml``: the same, in YAML,
- ``*.txt``: ``name=value`` lines.

Every top-level key becomes a custom fact.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

from .models import FactKind, ResolvedFact

logger = logging.getLogger(__name__)


class ExternalFactError(Exception):
    """Raised when an external fact file cannot be parsed."""

    pass


def _parse_txt(content: str) -> dict[str, Any]:
    facts: dict[str, Any] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise ExternalFactError(f"Expected name=value, got {line!r}")
        key, _, value = line.partition("=")
        facts[key.strip()] = value.strip()
    return facts


def parse_fact_file(path: Path) -> dict[str, Any]:
    """Parse one external fact file into a mapping of fact name to value.

    Raises:
        ExternalFactError: If the file cannot be read or parsed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ExternalFactError(f"Cannot read {path}: {e}") from e

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif suffix == ".txt":
            data = _parse_txt(content)
        else:
            raise ExternalFactError(f"Unsupported external fact file: {path}")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ExternalFactError(f"Failed to parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ExternalFactError(f"{path} must contain a mapping of fact names")

    return {str(k): v for k, v in data.items()}


class ExternalFactLoader:
    """Reads custom facts from a list of directories."""

    SUFFIXES = (".json", ".yaml", ".yml", ".txt")

    def __init__(self, dirs: Iterable[Path] = ()) -> None:
        self.dirs = [Path(d) for d in dirs]

    def _fact_files(self) -> list[Path]:
        files: list[Path] = []
        for directory in self.dirs:
            if not directory.is_dir():
                logger.debug("External fact directory %s does not exist", directory)
                continue
            files.extend(
                sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in self.SUFFIXES)
            )
        return files

    def load(self) -> list[ResolvedFact]:
        """Load all external facts. Files that fail to parse are skipped."""
        facts: list[ResolvedFact] = []
        for path in self._fact_files():
            try:
                data = parse_fact_file(path)
            except ExternalFactError as e:
                logger.warning("Skipping external facts: %s", e)
                continue

            facts.extend(ResolvedFact(name, value, FactKind.CUSTOM) for name, value in data.items())
        return facts
