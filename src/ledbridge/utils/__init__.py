"""Generic utility modules for ledbridge."""

from .observer import ObserverManager

__all__ = ["ObserverManager"]
