from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .console import ConsoleLog

__all__ = [
    "ConsoleFeedback",
    "DefeatReason",
    "FeedbackHooks",
    "NullFeedback",
]


class DefeatReason(str, Enum):
    HAZARD = "hazard"
    PREDATOR = "predator"


class FeedbackHooks(Protocol):
    """Notification sink for the audio/presentation layer. Must not block."""

    def on_success(self) -> None: ...

    def on_failure(self) -> None: ...

    def on_victory(self) -> None: ...

    def on_defeat(self, reason: DefeatReason) -> None: ...


class NullFeedback:
    __slots__ = ()

    def on_success(self) -> None:
        return None

    def on_failure(self) -> None:
        return None

    def on_victory(self) -> None:
        return None

    def on_defeat(self, reason: DefeatReason) -> None:
        return None


@dataclass(slots=True)
class ConsoleFeedback:
    """Routes cues to the console log; stands in for the audio layer."""

    log: ConsoleLog
    enabled: bool = True

    def _cue(self, name: str) -> None:
        if self.enabled:
            self.log.log(f"sfx: {name}")

    def on_success(self) -> None:
        self._cue("success")

    def on_failure(self) -> None:
        self._cue("failure")

    def on_victory(self) -> None:
        self._cue("victory")

    def on_defeat(self, reason: DefeatReason) -> None:
        self._cue(f"defeat ({reason.value})")
