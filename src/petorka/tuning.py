from __future__ import annotations

from dataclasses import dataclass, replace

from grove.config import PetorkaConfig
from grove.geom import Vec2

TILE = 40.0
MAP_TILES_W = 20
MAP_TILES_H = 12
BOARD_W = MAP_TILES_W * TILE
BOARD_H = MAP_TILES_H * TILE

PLAYER_RADIUS = 14.0
PREDATOR_RADIUS = 16.0

# Units per second.
PLAYER_SPEED = 160.0
PREDATOR_SPEED = 120.0

CHASE_RADIUS = 180.0
WANDER_ARRIVAL_RADIUS = 20.0
WANDER_RESAMPLE_ATTEMPTS = 20

PREDATOR_CONTACT_MARGIN = 4.0
DOOR_TRIGGER_HALF_EXTENTS = Vec2(26.0, 30.0)

CORRECT_REWARD = 10
WRONG_PENALTY = 10

MAX_FRAME_DT = 0.05
# Largest allowed cap; one capped step must stay shorter than the narrowest hazard.
MAX_FRAME_DT_LIMIT = 0.1


@dataclass(frozen=True, slots=True)
class Tuning:
    """Gameplay constants for one session.

    Defaults mirror the shipped map. `wrong_penalty` and `correct_reward` are
    magnitudes; the ledger subtracts the penalty.
    """

    player_speed: float = PLAYER_SPEED
    predator_speed: float = PREDATOR_SPEED
    chase_radius: float = CHASE_RADIUS
    wander_arrival_radius: float = WANDER_ARRIVAL_RADIUS
    wander_resample_attempts: int = WANDER_RESAMPLE_ATTEMPTS
    contact_margin: float = PREDATOR_CONTACT_MARGIN
    door_trigger: Vec2 = DOOR_TRIGGER_HALF_EXTENTS
    correct_reward: int = CORRECT_REWARD
    wrong_penalty: int = WRONG_PENALTY
    max_frame_dt: float = MAX_FRAME_DT

    def __post_init__(self) -> None:
        if not (float(self.player_speed) > 0.0):
            raise ValueError(f"player_speed must be positive, got {self.player_speed}")
        if not (float(self.predator_speed) > 0.0):
            raise ValueError(f"predator_speed must be positive, got {self.predator_speed}")
        if float(self.chase_radius) < 0.0:
            raise ValueError(f"chase_radius must be non-negative, got {self.chase_radius}")
        if float(self.wander_arrival_radius) < 0.0:
            raise ValueError(f"wander_arrival_radius must be non-negative, got {self.wander_arrival_radius}")
        if int(self.wander_resample_attempts) < 0:
            raise ValueError(f"wander_resample_attempts must be non-negative, got {self.wander_resample_attempts}")
        if float(self.contact_margin) < 0.0:
            raise ValueError(f"contact_margin must be non-negative, got {self.contact_margin}")
        if float(self.door_trigger.x) < 0.0 or float(self.door_trigger.y) < 0.0:
            raise ValueError(f"door_trigger must be non-negative, got {self.door_trigger}")
        if int(self.correct_reward) < 0 or int(self.wrong_penalty) < 0:
            raise ValueError("correct_reward and wrong_penalty are magnitudes and must be non-negative")
        if not (0.0 < float(self.max_frame_dt) <= MAX_FRAME_DT_LIMIT):
            raise ValueError(f"max_frame_dt must be in (0, {MAX_FRAME_DT_LIMIT}], got {self.max_frame_dt}")


def tuning_from_config(config: PetorkaConfig, *, base: Tuning | None = None) -> Tuning:
    """Overlay the user-editable fields of `petorka.cfg` onto `base`."""
    tuning = base if base is not None else Tuning()
    max_frame_dt = float(config.max_frame_dt)
    if not (max_frame_dt > 0.0):
        max_frame_dt = tuning.max_frame_dt
    max_frame_dt = min(max_frame_dt, MAX_FRAME_DT_LIMIT)
    return replace(
        tuning,
        contact_margin=max(0.0, float(config.contact_margin)),
        wrong_penalty=abs(int(config.wrong_penalty)),
        correct_reward=abs(int(config.correct_reward)),
        max_frame_dt=max_frame_dt,
    )
