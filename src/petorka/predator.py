from __future__ import annotations

"""Predator (wolf) steering.

Two modes share one speed: `CHASE` re-aims at the player every frame, `WANDER`
walks towards a sampled point. Mode is a pure function of the current
distance, so the predator may flip modes every frame at the chase boundary.

Hazards are avoided by sliding: a blocked full step degrades to its X-only or
Y-only component before giving up for the frame.
"""

from dataclasses import dataclass
import random

from grove.geom import Vec2

from .entities import Predator, PredatorMode
from .tuning import Tuning
from .world import World

__all__ = [
    "PredatorStep",
    "predator_mode_for",
    "resample_wander_target",
    "resolve_predator_move",
    "step_predator",
]


@dataclass(frozen=True, slots=True)
class PredatorStep:
    pos: Vec2
    mode: PredatorMode
    moved: bool = False
    slid: bool = False
    blocked: bool = False
    retargeted: bool = False


def predator_mode_for(player_pos: Vec2, predator_pos: Vec2, *, chase_radius: float) -> PredatorMode:
    if predator_pos.distance_to(player_pos) < float(chase_radius):
        return PredatorMode.CHASE
    return PredatorMode.WANDER


def resample_wander_target(world: World, radius: float, rng: random.Random, *, attempts: int) -> Vec2:
    region = world.interior
    for _ in range(max(0, int(attempts))):
        candidate = Vec2(
            rng.uniform(region.x, region.right),
            rng.uniform(region.y, region.bottom),
        )
        if not world.circle_hits_hazard(candidate, radius):
            return candidate
    return world.safe_point


def resolve_predator_move(world: World, pos: Vec2, step: Vec2, radius: float) -> tuple[Vec2, bool, bool]:
    """Return `(new_pos, slid, blocked)` for a proposed displacement.

    Axis fallbacks that would not move the predator at all are skipped, so a
    head-on approach into a hazard reports `blocked` instead of a silent stall.
    """

    full = world.clamp_circle(pos + step, radius)
    if not world.circle_hits_hazard(full, radius):
        return full, False, False

    for candidate in (
        world.clamp_circle(pos.with_x(pos.x + step.x), radius),
        world.clamp_circle(pos.with_y(pos.y + step.y), radius),
    ):
        if candidate == pos:
            continue
        if not world.circle_hits_hazard(candidate, radius):
            return candidate, True, False

    return pos, False, True


def step_predator(
    predator: Predator,
    player_pos: Vec2,
    dt: float,
    *,
    world: World,
    rng: random.Random,
    tuning: Tuning,
) -> PredatorStep:
    """Advance the predator one unfrozen frame.

    Updates `mode`, `wander_target`, `resample_pending`, `pos` and `vel` in place.
    """

    dt = float(dt)
    mode = predator_mode_for(player_pos, predator.pos, chase_radius=tuning.chase_radius)
    predator.mode = mode

    retargeted = False
    if mode is PredatorMode.CHASE:
        target = player_pos
    else:
        arrived = predator.pos.distance_to(predator.wander_target) < float(tuning.wander_arrival_radius)
        if predator.resample_pending or arrived:
            predator.wander_target = resample_wander_target(
                world,
                predator.radius,
                rng,
                attempts=tuning.wander_resample_attempts,
            )
            predator.resample_pending = False
            retargeted = True
        target = predator.wander_target

    direction = predator.pos.direction_to(target)
    if not (dt > 0.0) or direction == Vec2():
        predator.vel = Vec2()
        return PredatorStep(pos=predator.pos, mode=mode, retargeted=retargeted)

    step = direction * (float(tuning.predator_speed) * dt)
    new_pos, slid, blocked = resolve_predator_move(world, predator.pos, step, predator.radius)
    if blocked and mode is PredatorMode.WANDER:
        predator.resample_pending = True

    moved = new_pos != predator.pos
    predator.vel = (new_pos - predator.pos) * (1.0 / dt)
    predator.pos = new_pos
    return PredatorStep(
        pos=new_pos,
        mode=mode,
        moved=moved,
        slid=slid,
        blocked=blocked,
        retargeted=retargeted,
    )
