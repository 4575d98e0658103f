from __future__ import annotations

"""Ambient background music lifecycle.

There are no music assets; the state only tracks whether the loop would be
playing and reports transitions to the console log.
"""

from dataclasses import dataclass

from .console import ConsoleLog


@dataclass(slots=True)
class AmbientMusicState:
    log: ConsoleLog
    enabled: bool
    playing: bool = False


def init_ambient_music(*, log: ConsoleLog, enabled: bool) -> AmbientMusicState:
    return AmbientMusicState(log=log, enabled=bool(enabled))


def start_ambient_music(state: AmbientMusicState) -> None:
    if not state.enabled or state.playing:
        return
    state.playing = True
    state.log.log("music: start")


def stop_ambient_music(state: AmbientMusicState) -> None:
    if not state.playing:
        return
    state.playing = False
    state.log.log("music: stop")


def set_ambient_music_enabled(state: AmbientMusicState, enabled: bool) -> None:
    if not enabled:
        stop_ambient_music(state)
    state.enabled = bool(enabled)
