from __future__ import annotations

"""Minimal raylib presentation.

Draws the session snapshot with primitive shapes and translates keyboard input
into the session's public operations. Holds no game state of its own besides
the in-progress math answer text.
"""

from pathlib import Path
import random
import time

import pyray as rl

from grove.geom import Rect, Vec2

from .clock import FrameClock
from .console import ConsoleLog
from .feedback import ConsoleFeedback
from .movement import Direction
from .music import (
    AmbientMusicState,
    init_ambient_music,
    set_ambient_music_enabled,
    start_ambient_music,
    stop_ambient_music,
)
from .session import Session
from .snapshot import FrameSnapshot
from .tuning import Tuning

HUD_H = 40
ANSWER_MAX_LEN = 4

BG_COLOR = rl.Color(18, 22, 18, 255)
GRASS_COLOR = rl.Color(76, 140, 64, 255)
PATH_COLOR = rl.Color(190, 160, 110, 255)
LAKE_COLOR = rl.Color(52, 110, 200, 255)
TREE_COLOR = rl.Color(30, 90, 40, 255)
DOOR_CLOSED_COLOR = rl.Color(120, 70, 30, 255)
DOOR_OPEN_COLOR = rl.Color(220, 200, 90, 255)
PLAYER_COLOR = rl.Color(60, 200, 220, 255)
WOLF_WANDER_COLOR = rl.Color(140, 140, 150, 255)
WOLF_CHASE_COLOR = rl.Color(220, 70, 60, 255)
TEXT_COLOR = rl.Color(235, 235, 235, 255)
HINT_COLOR = rl.Color(160, 160, 160, 255)
MODAL_BG_COLOR = rl.Color(10, 10, 12, 220)

_KEY_DIRECTIONS: tuple[tuple[int, Direction], ...] = (
    (rl.KeyboardKey.KEY_UP, Direction.UP),
    (rl.KeyboardKey.KEY_W, Direction.UP),
    (rl.KeyboardKey.KEY_DOWN, Direction.DOWN),
    (rl.KeyboardKey.KEY_S, Direction.DOWN),
    (rl.KeyboardKey.KEY_LEFT, Direction.LEFT),
    (rl.KeyboardKey.KEY_A, Direction.LEFT),
    (rl.KeyboardKey.KEY_RIGHT, Direction.RIGHT),
    (rl.KeyboardKey.KEY_D, Direction.RIGHT),
)


class PlayView:
    def __init__(self, session: Session, *, music: AmbientMusicState | None = None) -> None:
        self._session = session
        self._music = music
        self._answer = ""
        self._snapshot: FrameSnapshot = session.snapshot()

    def _poll_answer_text(self) -> None:
        while True:
            value = rl.get_char_pressed()
            if value == 0:
                break
            char = chr(int(value))
            if len(self._answer) >= ANSWER_MAX_LEN:
                continue
            if char.isdigit() or (char == "-" and not self._answer):
                self._answer += char
        if rl.is_key_pressed(rl.KeyboardKey.KEY_BACKSPACE):
            self._answer = self._answer[:-1]

    def _handle_task_input(self) -> None:
        session = self._session
        task = self._snapshot.task
        if task is None:
            return
        if rl.is_key_pressed(rl.KeyboardKey.KEY_ESCAPE):
            session.cancel()
            self._answer = ""
            return
        if task.kind == "math":
            self._poll_answer_text()
            if rl.is_key_pressed(rl.KeyboardKey.KEY_ENTER) and self._answer:
                session.submit(self._answer)
                self._answer = ""
            return
        for key, index in ((rl.KeyboardKey.KEY_ONE, 0), (rl.KeyboardKey.KEY_TWO, 1)):
            if rl.is_key_pressed(key) and index < len(task.choices):
                session.choose(task.choices[index])
                return

    def _handle_movement_input(self) -> None:
        session = self._session
        for key, direction in _KEY_DIRECTIONS:
            if rl.is_key_pressed(key):
                session.set_direction(direction)
            elif rl.is_key_released(key):
                session.release_direction(direction)

    def update(self, dt: float) -> None:
        session = self._session
        if self._music is not None and rl.is_key_pressed(rl.KeyboardKey.KEY_M):
            set_ambient_music_enabled(self._music, not self._music.enabled)
            start_ambient_music(self._music)
        if self._snapshot.task is not None:
            self._handle_task_input()
        elif rl.is_key_pressed(rl.KeyboardKey.KEY_R):
            session.reset()
            self._answer = ""
        self._handle_movement_input()
        session.step(dt)
        self._snapshot = session.snapshot()

    def _draw_world(self) -> None:
        world = self._session.world
        snap = self._snapshot
        rl.draw_rectangle_rec(world.bounds.offset(dy=HUD_H).to_rl(), GRASS_COLOR)
        for path in world.paths:
            rl.draw_rectangle_rec(path.offset(dy=HUD_H).to_rl(), PATH_COLOR)
        for hazard in world.hazards:
            rl.draw_rectangle_rec(hazard.offset(dy=HUD_H).to_rl(), LAKE_COLOR)
        for tree in world.trees:
            rl.draw_circle_v(tree.offset(20.0, 20.0 + HUD_H).to_rl(), 16.0, TREE_COLOR)
        for door in snap.doors:
            color = DOOR_OPEN_COLOR if door.open else DOOR_CLOSED_COLOR
            rl.draw_rectangle_rec(Rect(door.x - 14.0, door.y - 18.0 + HUD_H, 28.0, 36.0).to_rl(), color)
            label = "ok" if door.open else ("+" if door.kind == "math" else "A")
            rl.draw_text(label, int(door.x) - 5, int(door.y) - 8 + HUD_H, 16, TEXT_COLOR)
        player = Vec2(snap.player.x, snap.player.y + HUD_H)
        rl.draw_circle_v(player.to_rl(), snap.player_radius, PLAYER_COLOR)
        wolf_color = WOLF_CHASE_COLOR if snap.predator_mode == "chase" else WOLF_WANDER_COLOR
        wolf = Vec2(snap.predator.x, snap.predator.y + HUD_H)
        rl.draw_circle_v(wolf.to_rl(), snap.predator_radius, wolf_color)

    def _draw_modal(self, title: str, lines: list[str]) -> None:
        width = rl.get_screen_width()
        height = rl.get_screen_height()
        box_w = 420
        box_h = 60 + 26 * len(lines)
        x = (width - box_w) // 2
        y = (height - box_h) // 2
        rl.draw_rectangle(x, y, box_w, box_h, MODAL_BG_COLOR)
        rl.draw_text(title, x + 16, y + 14, 22, TEXT_COLOR)
        for idx, line in enumerate(lines):
            rl.draw_text(line, x + 16, y + 48 + idx * 26, 18, HINT_COLOR if idx == len(lines) - 1 else TEXT_COLOR)

    def draw(self) -> None:
        snap = self._snapshot
        rl.clear_background(BG_COLOR)
        self._draw_world()
        rl.draw_text(f"Score: {snap.score}", 12, 10, 20, TEXT_COLOR)
        opened = sum(1 for door in snap.doors if door.open)
        rl.draw_text(f"Doors: {opened}/{len(snap.doors)}", 180, 10, 20, TEXT_COLOR)

        task = snap.task
        if task is not None:
            if task.kind == "math":
                lines = [task.prompt, f"> {self._answer}_", "enter: check  esc: close"]
            else:
                lines = [task.prompt, *(f"{idx + 1}: {word}" for idx, word in enumerate(task.choices)), "esc: close"]
            self._draw_modal(f"Door #{task.door_id}", lines)
        elif snap.outcome == "victory":
            self._draw_modal("All doors open!", [f"Final score {snap.score}", "R: play again"])
        elif snap.outcome == "defeat":
            reason = "The wolf got you." if snap.defeat_reason == "predator" else "You fell into the lake."
            self._draw_modal("Game over", [reason, "R: restart"])


def run_play(
    *,
    base_dir: Path,
    tuning: Tuning,
    seed: int | None = None,
    width: int = 800,
    height: int = 560,
    fps: int = 60,
    sound_enabled: bool = True,
    music_enabled: bool = True,
) -> None:
    """Open the window and run the game loop until it is closed."""
    log = ConsoleLog(base_dir=base_dir)
    rng = random.Random(seed if seed is not None else time.time_ns())
    session = Session(
        tuning=tuning,
        rng=rng,
        log=log,
        feedback=ConsoleFeedback(log=log, enabled=sound_enabled),
    )
    log.log(f"session: window start seed={seed}")
    music = init_ambient_music(log=log, enabled=music_enabled)
    view = PlayView(session, music=music)
    clock = FrameClock(max_dt=tuning.max_frame_dt)

    rl.init_window(int(width), int(height), "Petorka")
    rl.set_exit_key(rl.KeyboardKey.KEY_NULL)
    rl.set_target_fps(int(fps))
    start_ambient_music(music)
    try:
        while not rl.window_should_close():
            view.update(clock.tick(rl.get_time()))
            rl.begin_drawing()
            view.draw()
            rl.end_drawing()
    finally:
        stop_ambient_music(music)
        rl.close_window()
        log.flush()
