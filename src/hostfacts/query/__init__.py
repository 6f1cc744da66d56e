"""Query splitting and matching."""

from .parser import QueryParser, SearchedFact
from .splitter import split_key

__all__ = ["QueryParser", "SearchedFact", "split_key"]
