"""Non-destructive audio edit records: hashed edit graphs, version history and diffs."""

__version__ = "0.1.0"

__all__ = [
    "diff",
    "errors",
    "graph",
    "hashing",
    "history",
    "ops",
    "plugin",
    "wasm",
]