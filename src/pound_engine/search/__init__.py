"""Incremental search."""

from .engine import (
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    SearchDirection,
    SearchEngine,
    SearchOutcome,
    SearchPhase,
    SearchState,
)

__all__ = [
    "KEY_DOWN",
    "KEY_ENTER",
    "KEY_ESCAPE",
    "KEY_LEFT",
    "KEY_RIGHT",
    "KEY_UP",
    "SearchDirection",
    "SearchEngine",
    "SearchOutcome",
    "SearchPhase",
    "SearchState",
]
