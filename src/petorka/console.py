from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

CONSOLE_LOG_NAME = "console.log"
MAX_CONSOLE_LINES = 0x1000


@dataclass(slots=True)
class ConsoleLog:
    """In-memory log lines, appended to `<base_dir>/console.log` on `flush()`.

    `base_dir=None` keeps the log memory-only (tests, headless previews).
    """

    base_dir: Path | None = None
    lines: list[str] = field(default_factory=list)
    # Count of leading `lines` already written to disk.
    flushed_index: int = 0

    @property
    def path(self) -> Path | None:
        if self.base_dir is None:
            return None
        return self.base_dir / CONSOLE_LOG_NAME

    def log(self, message: str) -> None:
        self.lines.append(str(message))
        excess = len(self.lines) - MAX_CONSOLE_LINES
        if excess > 0:
            del self.lines[:excess]
            self.flushed_index = max(0, self.flushed_index - excess)

    def clear(self) -> None:
        self.lines.clear()
        self.flushed_index = 0

    def tail(self, count: int) -> list[str]:
        return self.lines[-count:] if count > 0 else []

    def flush(self) -> Path | None:
        pending = self.lines[self.flushed_index :]
        self.flushed_index = len(self.lines)
        path = self.path
        if path is None or not pending:
            return path
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.writelines(f"{line.rstrip()}\n" for line in pending)
        return path
