from __future__ import annotations

import os
from pathlib import Path

import typer

from grove.config import ensure_petorka_cfg
from .console import ConsoleLog
from .debug import set_debug_enabled
from .feedback import ConsoleFeedback
from .movement import Direction, direction_from_value
from .session import Session
from .snapshot import encode_snapshot
from .tasks import MathTask
from .tuning import MAX_FRAME_DT_LIMIT, Tuning, tuning_from_config
from .world import DEFAULT_WORLD

app = typer.Typer(add_completion=False)

ANSWER_POLICIES = ("correct", "wrong", "cancel", "none")
RUNTIME_DIR_ENV = "PETORKA_RUNTIME_DIR"


def default_runtime_dir() -> Path:
    override = os.environ.get(RUNTIME_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path("artifacts") / "runtime"


def _parse_moves(text: str) -> list[tuple[Direction | None, int]]:
    """Parse `up:30,right:60,none:10` into `(direction, frames)` pairs."""
    script: list[tuple[Direction | None, int]] = []
    for chunk in text.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, sep, count_text = chunk.partition(":")
        if not sep:
            raise ValueError(f"move {chunk!r} is missing ':<frames>'")
        direction = direction_from_value(name)
        if direction is None and name.strip().lower() != "none":
            raise ValueError(f"unknown direction {name!r}")
        try:
            count = int(count_text)
        except ValueError:
            raise ValueError(f"bad frame count in {chunk!r}") from None
        if count < 0:
            raise ValueError(f"negative frame count in {chunk!r}")
        script.append((direction, count))
    return script


def _expand_moves(script: list[tuple[Direction | None, int]]) -> list[Direction | None]:
    frames: list[Direction | None] = []
    for direction, count in script:
        frames.extend([direction] * count)
    return frames


def _answer_active_task(session: Session, policy: str) -> None:
    active = session.gate.active
    if active is None or policy == "none":
        return
    if policy == "cancel":
        session.cancel()
        return
    task = active.task
    if isinstance(task, MathTask):
        if policy == "correct":
            session.submit(task.expected_answer)
        else:
            session.submit(task.expected_answer + 1)
        return
    session.choose(task.correct_word if policy == "correct" else task.wrong_word)


@app.command("map")
def cmd_map() -> None:
    """Print the default world layout."""
    world = DEFAULT_WORLD
    typer.echo(f"Board {world.width:g}x{world.height:g}")
    typer.echo(f"Player start x={world.player_start.x:g} y={world.player_start.y:g}")
    typer.echo(f"Predator start x={world.predator_start.x:g} y={world.predator_start.y:g}")
    for idx, hazard in enumerate(world.hazards):
        typer.echo(f"hazard {idx}  x={hazard.x:6.1f}  y={hazard.y:6.1f}  w={hazard.w:6.1f}  h={hazard.h:6.1f}")
    for door in world.doors:
        typer.echo(f"door {door.id:2d}  {door.kind.value:8s}  x={door.pos.x:6.1f}  y={door.pos.y:6.1f}")
    for tree in world.trees:
        typer.echo(f"tree  x={tree.x:6.1f}  y={tree.y:6.1f}")


@app.command("simulate")
def cmd_simulate(
    frames: int = typer.Option(600, min=0, help="frames to run"),
    dt: float = typer.Option(1.0 / 60.0, help="seconds per frame"),
    seed: int = typer.Option(0, help="rng seed"),
    moves: str = typer.Option("", help="scripted input, e.g. up:30,right:60,none:10"),
    answer: str = typer.Option("correct", help="task policy: correct|wrong|cancel|none"),
    every: bool = typer.Option(False, "--every", help="print a snapshot for every frame"),
    stop_on_outcome: bool = typer.Option(True, help="stop once the session is won or lost"),
    base_dir: Path | None = typer.Option(None, help="flush console.log here"),
    debug: bool = typer.Option(False, "--debug", help="log predator mode changes"),
) -> None:
    """Run a headless session with scripted input and print JSON snapshots."""
    if answer not in ANSWER_POLICIES:
        typer.echo(f"unknown answer policy {answer!r}. Available: {', '.join(ANSWER_POLICIES)}", err=True)
        raise typer.Exit(code=1)
    try:
        script = _expand_moves(_parse_moves(moves))
    except ValueError as exc:
        typer.echo(f"invalid --moves: {exc}", err=True)
        raise typer.Exit(code=1) from None

    if debug:
        set_debug_enabled(True)
    log = ConsoleLog(base_dir=base_dir)
    session = Session.build(seed=seed, log=log, feedback=ConsoleFeedback(log=log))
    log.log(f"session: headless start seed={seed} frames={frames} dt={dt:g}")

    for frame_index in range(frames):
        direction = script[frame_index] if frame_index < len(script) else None
        session.set_direction(direction)
        _answer_active_task(session, answer)
        session.step(dt)
        if every:
            typer.echo(encode_snapshot(session.snapshot()).decode("utf-8"))
        if stop_on_outcome and session.ledger.finished:
            break

    if not every:
        typer.echo(encode_snapshot(session.snapshot()).decode("utf-8"))
    path = log.flush()
    if path is not None:
        typer.echo(f"log: {path}", err=True)


@app.command("config")
def cmd_config(
    base_dir: Path | None = typer.Option(
        None,
        "--base-dir",
        "--runtime-dir",
        help=f"directory holding petorka.cfg (override default with {RUNTIME_DIR_ENV})",
    ),
    sound: bool | None = typer.Option(None, "--sound/--no-sound", help="enable sound cues"),
    music: bool | None = typer.Option(None, "--music/--no-music", help="enable ambient music"),
    width: int | None = typer.Option(None, min=1, help="window width"),
    height: int | None = typer.Option(None, min=1, help="window height"),
    fps: int | None = typer.Option(None, min=1, help="target fps"),
    max_dt: float | None = typer.Option(None, help="frame delta cap in seconds"),
    margin: float | None = typer.Option(None, help="predator contact forgiveness margin"),
    penalty: int | None = typer.Option(None, help="points lost per wrong answer"),
    reward: int | None = typer.Option(None, help="points gained per correct answer"),
    seed: int | None = typer.Option(None, help="rng seed (0 = time based)"),
) -> None:
    """Show or update settings in petorka.cfg."""
    if max_dt is not None and not (0.0 < max_dt <= MAX_FRAME_DT_LIMIT):
        typer.echo(f"--max-dt must be in (0, {MAX_FRAME_DT_LIMIT:g}], got {max_dt}", err=True)
        raise typer.Exit(code=1)
    if margin is not None and margin < 0.0:
        typer.echo(f"--margin must be non-negative, got {margin}", err=True)
        raise typer.Exit(code=1)
    config = ensure_petorka_cfg(base_dir if base_dir is not None else default_runtime_dir())

    changed = False
    updates = (
        ("sound_enabled", sound),
        ("music_enabled", music),
        ("window_width", width),
        ("window_height", height),
        ("target_fps", fps),
        ("max_frame_dt", max_dt),
        ("contact_margin", margin),
        ("wrong_penalty", penalty),
        ("correct_reward", reward),
        ("rng_seed", seed),
    )
    for name, value in updates:
        if value is None:
            continue
        setattr(config, name, value)
        changed = True
    if changed:
        config.save()

    typer.echo(f"config: {config.path}")
    for name, _ in updates:
        typer.echo(f"{name} = {getattr(config, name)}")


@app.command("play")
def cmd_play(
    base_dir: Path | None = typer.Option(
        None,
        "--base-dir",
        "--runtime-dir",
        help=f"directory holding petorka.cfg and console.log (override default with {RUNTIME_DIR_ENV})",
    ),
    seed: int | None = typer.Option(None, help="rng seed (default: from petorka.cfg)"),
    fps: int | None = typer.Option(None, min=1, help="target fps (default: from petorka.cfg)"),
    debug: bool = typer.Option(False, "--debug", help="log predator mode changes"),
) -> None:
    """Open the game window."""
    from . import view

    if base_dir is None:
        base_dir = default_runtime_dir()
    config = ensure_petorka_cfg(base_dir)
    if debug:
        set_debug_enabled(True)
    tuning = tuning_from_config(config, base=Tuning())
    if seed is None and config.rng_seed != 0:
        seed = config.rng_seed
    view.run_play(
        base_dir=base_dir,
        tuning=tuning,
        seed=seed,
        width=config.window_width,
        height=config.window_height,
        fps=fps if fps is not None else config.target_fps,
        sound_enabled=config.sound_enabled,
        music_enabled=config.music_enabled,
    )


def main(argv: list[str] | None = None) -> None:
    app(prog_name="petorka", args=argv)


if __name__ == "__main__":
    main()
