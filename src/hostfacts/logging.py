"""JSONL logging for fact resolution and assembly."""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .facts.models import ResolvedFact

DEFAULT_LOG_DIR = Path.home() / ".hostfacts" / "logs"


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: str
    event: str
    level: str = "info"
    fact_name: str | None = None
    fact_type: str | None = None
    user_query: str | None = None
    duration_ms: float | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None and empty values."""
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None and v != {} and v != ""}


class FactLogger:
    """Logger that writes structured records in JSONL format."""

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "hostfacts.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = DEFAULT_LOG_DIR
        self.log_dir = Path(log_dir)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    def _rotate_if_needed(self) -> None:
        if not self.log_path.exists():
            return

        if self.log_path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
            rotated_name = f"{self.log_path.stem}_{timestamp}.jsonl"
            self.log_path.rename(self.log_dir / rotated_name)

    def _write(self, entry: LogEntry) -> None:
        # The directory appears with the first record, not with the logger
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._rotate_if_needed()

        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict(), default=str) + "\n")

    def log(
        self,
        event: str,
        *,
        level: str = "info",
        fact_name: str | None = None,
        fact_type: str | None = None,
        user_query: str | None = None,
        duration_ms: float | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            level=level,
            fact_name=fact_name,
            fact_type=fact_type,
            user_query=user_query,
            duration_ms=duration_ms,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def error(self, event: str, message: str, **kwargs: Any) -> None:
        """Log an error-level event."""
        self.log(event, level="error", error=message, **kwargs)

    def log_conflict(self, fact: "ResolvedFact") -> None:
        """Log a fact that could not be placed in the collection."""
        group = fact.name.split(".")[0]
        self.error(
            "fact_conflict",
            f"{fact.kind.value.capitalize()} fact `{fact.name}` cannot be added to collection. "
            f"The format of this fact is incompatible with other facts that belong "
            f"to `{group}` group",
            fact_name=fact.name,
            fact_type=fact.kind.value,
            user_query=fact.user_query,
            group=group,
        )

    def log_resolve(self, definition: str, duration_ms: float, facts: int) -> None:
        """Log a finished fact definition."""
        self.log(
            "fact_resolved",
            level="debug",
            fact_name=definition,
            duration_ms=duration_ms,
            facts=facts,
        )

    def log_resolve_error(self, definition: str, error: Exception) -> None:
        """Log a fact definition that raised while resolving."""
        self.error(
            "fact_resolve_failed",
            f"{type(error).__name__}: {error}",
            fact_name=definition,
        )


# Global logger instance
_logger: FactLogger | None = None


def get_logger() -> FactLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = FactLogger()
    return _logger


def configure_logger(log_dir: str | Path | None = None, max_size_mb: float = 10.0) -> FactLogger:
    """Configure and return the global logger."""
    global _logger
    _logger = FactLogger(log_dir=log_dir, max_size_mb=max_size_mb)
    return _logger
