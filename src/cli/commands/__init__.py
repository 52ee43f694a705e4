"""CLI command modules."""

from .insight import insight
from .state import state
from .sync_cmd import sync

__all__ = ["insight", "state", "sync"]
