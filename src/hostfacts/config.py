"""Options for fact resolution.

Options are read from ~/.hostfacts/config.json, then overridden by
HOSTFACTS_* environment variables (a .env file is loaded at start-up),
then by command-line flags.
"""

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".hostfacts" / "config.json"

_TRUE = ("true", "yes", "1", "on")
_FALSE = ("false", "no", "0", "off")


@dataclass
class FactOptions:
    """Options read by the fact engine.

    Attributes:
        show_legacy: Include legacy facts in results that did not ask for them.
        structured_external_facts: Expand dotted custom fact names into nested groups.
        external_dirs: Directories holding external fact files.
        max_workers: Threads used to resolve fact definitions concurrently.
        log_dir: Directory for the JSONL log (~/.hostfacts/logs if None).
        log_max_size_mb: Size at which the log file is rotated.
        metadata_timeout: Seconds to wait for cloud metadata endpoints.
    """

    show_legacy: bool = False
    structured_external_facts: bool = False
    external_dirs: list[Path] = field(default_factory=list)
    max_workers: int = 4
    log_dir: Path | None = None
    log_max_size_mb: float = 10.0
    metadata_timeout: float = 0.6

    def __post_init__(self) -> None:
        if self.log_dir is None:
            self.log_dir = Path.home() / ".hostfacts" / "logs"

        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")


def _parse_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower().strip()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    return default


def _parse_dirs(value: Any) -> list[Path]:
    if isinstance(value, str):
        value = [v for v in value.split(os.pathsep) if v.strip()]
    if not isinstance(value, list):
        return []
    return [Path(str(v)).expanduser() for v in value]


def load_config(config_path: Path | None = None) -> FactOptions:
    """Load FactOptions from a JSON file.

    The config file should have this structure:
    ```json
    {
      "facts": {
        "show_legacy": false,
        "structured_external_facts": true,
        "external_dirs": ["~/.hostfacts/facts.d"],
        "max_workers": 4,
        "metadata_timeout": 0.6
      },
      "logging": {
        "dir": "~/.hostfacts/logs",
        "max_size_mb": 10
      }
    }
    ```

    Args:
        config_path: Path to config file. Uses DEFAULT_CONFIG_PATH if None.

    Returns:
        FactOptions instance with loaded values.
    """
    path = config_path or DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return FactOptions()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON in %s: %s. Using defaults.", path, e)
        return FactOptions()
    except OSError as e:
        logger.warning("Cannot read %s: %s. Using defaults.", path, e)
        return FactOptions()

    if not isinstance(data, dict):
        logger.warning("Config in %s is not an object. Using defaults.", path)
        return FactOptions()

    return _parse_config(data)


def _parse_config(data: dict[str, Any]) -> FactOptions:
    """Parse config dictionary into FactOptions."""
    facts_data = data.get("facts", {})
    if not isinstance(facts_data, dict):
        facts_data = {}
    logging_data = data.get("logging", {})
    if not isinstance(logging_data, dict):
        logging_data = {}

    max_workers = facts_data.get("max_workers", 4)
    if not isinstance(max_workers, int) or isinstance(max_workers, bool) or max_workers < 1:
        max_workers = 4

    timeout = facts_data.get("metadata_timeout", 0.6)
    if not isinstance(timeout, (int, float)) or timeout <= 0:
        timeout = 0.6

    max_size_mb = logging_data.get("max_size_mb", 10.0)
    if not isinstance(max_size_mb, (int, float)) or max_size_mb <= 0:
        max_size_mb = 10.0

    log_dir = logging_data.get("dir")
    return FactOptions(
        show_legacy=_parse_bool(facts_data.get("show_legacy"), False),
        structured_external_facts=_parse_bool(
            facts_data.get("structured_external_facts"), False
        ),
        external_dirs=_parse_dirs(facts_data.get("external_dirs", [])),
        max_workers=max_workers,
        log_dir=Path(log_dir).expanduser() if isinstance(log_dir, str) else None,
        log_max_size_mb=float(max_size_mb),
        metadata_timeout=float(timeout),
    )


def apply_env(options: FactOptions, environ: dict[str, str] | None = None) -> FactOptions:
    """Return a copy of ``options`` with HOSTFACTS_* environment overrides."""
    env = os.environ if environ is None else environ
    changes: dict[str, Any] = {}

    if "HOSTFACTS_SHOW_LEGACY" in env:
        changes["show_legacy"] = _parse_bool(env["HOSTFACTS_SHOW_LEGACY"], options.show_legacy)

    if "HOSTFACTS_STRUCTURED_EXTERNAL_FACTS" in env:
        changes["structured_external_facts"] = _parse_bool(
            env["HOSTFACTS_STRUCTURED_EXTERNAL_FACTS"], options.structured_external_facts
        )

    if "HOSTFACTS_EXTERNAL_DIRS" in env:
        changes["external_dirs"] = _parse_dirs(env["HOSTFACTS_EXTERNAL_DIRS"])

    if "HOSTFACTS_MAX_WORKERS" in env:
        try:
            workers = int(env["HOSTFACTS_MAX_WORKERS"])
        except ValueError:
            logger.warning("Ignoring invalid HOSTFACTS_MAX_WORKERS=%r", env["HOSTFACTS_MAX_WORKERS"])
        else:
            if workers >= 1:
                changes["max_workers"] = workers

    if env.get("HOSTFACTS_LOG_DIR"):
        changes["log_dir"] = Path(env["HOSTFACTS_LOG_DIR"]).expanduser()

    return replace(options, **changes) if changes else options
