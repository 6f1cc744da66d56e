"""hostfacts: structured host facts behind a dotted query namespace."""

from .config import FactOptions, load_config
from .facts import FactCollection, FactFilter, FactKind, ResolvedFact
from .facts.manager import FactManager
from .query import split_key

__version__ = "0.1.0"

__all__ = [
    "FactCollection",
    "FactFilter",
    "FactKind",
    "FactManager",
    "FactOptions",
    "ResolvedFact",
    "load_config",
    "split_key",
]
