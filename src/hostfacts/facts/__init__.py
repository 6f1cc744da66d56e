"""Resolved facts, their filter and the collection they are assembled into."""

from .collection import FactCollection
from .external import ExternalFactLoader
from .filter import FactFilter
from .models import FactKind, ResolvedFact

__all__ = [
    "ExternalFactLoader",
    "FactCollection",
    "FactFilter",
    "FactKind",
    "ResolvedFact",
]
