"""Fact definitions: the probes behind each fact name."""

from .base import FactDefinition
from .catalog import load_definitions

__all__ = ["FactDefinition", "load_definitions"]
