"""Terminal line editor engine: buffer, viewport and incremental search."""

__all__ = [
    "adapters",
    "buffer",
    "editor",
    "runtime",
    "search",
    "viewport",
]

__version__ = "0.1.0"
