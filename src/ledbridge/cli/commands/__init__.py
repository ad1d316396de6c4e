"""CLI commands for ledbridge."""

from .effect import effect
from .index import index
from .status import status
from .test_pattern import test_pattern

__all__ = ["effect", "index", "status", "test_pattern"]
