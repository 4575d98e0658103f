from __future__ import annotations

__all__ = [
    "config",
    "geom",
    "math",
]
