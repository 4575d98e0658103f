from __future__ import annotations

import os

_DEBUG_OVERRIDE: bool | None = None


def set_debug_enabled(enabled: bool | None) -> None:
    """Force debug output on/off; `None` falls back to the environment."""
    global _DEBUG_OVERRIDE
    _DEBUG_OVERRIDE = None if enabled is None else bool(enabled)


def debug_enabled() -> bool:
    if _DEBUG_OVERRIDE is not None:
        return bool(_DEBUG_OVERRIDE)
    return os.environ.get("PETORKA_DEBUG") == "1"
