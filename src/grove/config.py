from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from construct import Byte, Bytes, Float32l, Int32sl, Int32ul, Struct

PETORKA_CFG_NAME = "petorka.cfg"
PETORKA_CFG_SIZE = 0x40
RESERVED_24_SIZE = 0x1C

DEFAULT_WINDOW_WIDTH = 800
DEFAULT_WINDOW_HEIGHT = 560
DEFAULT_TARGET_FPS = 60
DEFAULT_MAX_FRAME_DT = 0.05
DEFAULT_CONTACT_MARGIN = 4.0
DEFAULT_WRONG_PENALTY = 10
DEFAULT_CORRECT_REWARD = 10

PETORKA_CFG_STRUCT = Struct(
    "sound_disable" / Byte,
    "music_disable" / Byte,
    "reserved_02" / Bytes(2),
    "window_width" / Int32ul,
    "window_height" / Int32ul,
    "target_fps" / Int32ul,
    "max_frame_dt" / Float32l,
    "contact_margin" / Float32l,
    # Both are stored as magnitudes; the penalty is subtracted from the score.
    "wrong_penalty" / Int32sl,
    "correct_reward" / Int32sl,
    # 0 picks a time-based seed at session start.
    "rng_seed" / Int32ul,
    "reserved_24" / Bytes(RESERVED_24_SIZE),
)


@dataclass(slots=True)
class PetorkaConfig:
    path: Path
    data: dict

    @property
    def sound_enabled(self) -> bool:
        return int(self.data["sound_disable"]) == 0

    @sound_enabled.setter
    def sound_enabled(self, value: bool) -> None:
        self.data["sound_disable"] = 0 if bool(value) else 1

    @property
    def music_enabled(self) -> bool:
        return int(self.data["music_disable"]) == 0

    @music_enabled.setter
    def music_enabled(self, value: bool) -> None:
        self.data["music_disable"] = 0 if bool(value) else 1

    @property
    def window_width(self) -> int:
        return int(self.data["window_width"])

    @window_width.setter
    def window_width(self, value: int) -> None:
        self.data["window_width"] = max(1, int(value))

    @property
    def window_height(self) -> int:
        return int(self.data["window_height"])

    @window_height.setter
    def window_height(self, value: int) -> None:
        self.data["window_height"] = max(1, int(value))

    @property
    def target_fps(self) -> int:
        return int(self.data["target_fps"])

    @target_fps.setter
    def target_fps(self, value: int) -> None:
        self.data["target_fps"] = max(1, int(value))

    @property
    def max_frame_dt(self) -> float:
        return float(self.data["max_frame_dt"])

    @max_frame_dt.setter
    def max_frame_dt(self, value: float) -> None:
        self.data["max_frame_dt"] = float(value)

    @property
    def contact_margin(self) -> float:
        return float(self.data["contact_margin"])

    @contact_margin.setter
    def contact_margin(self, value: float) -> None:
        self.data["contact_margin"] = float(value)

    @property
    def wrong_penalty(self) -> int:
        return int(self.data["wrong_penalty"])

    @wrong_penalty.setter
    def wrong_penalty(self, value: int) -> None:
        self.data["wrong_penalty"] = abs(int(value))

    @property
    def correct_reward(self) -> int:
        return int(self.data["correct_reward"])

    @correct_reward.setter
    def correct_reward(self, value: int) -> None:
        self.data["correct_reward"] = abs(int(value))

    @property
    def rng_seed(self) -> int:
        return int(self.data["rng_seed"])

    @rng_seed.setter
    def rng_seed(self, value: int) -> None:
        self.data["rng_seed"] = int(value) & 0xFFFFFFFF

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(PETORKA_CFG_STRUCT.build(self.data))


def default_petorka_cfg_data() -> dict:
    data = PETORKA_CFG_STRUCT.parse(bytes(PETORKA_CFG_SIZE))
    config = PetorkaConfig(path=Path("<memory>"), data=data)
    config.sound_enabled = True
    config.music_enabled = True
    config.window_width = DEFAULT_WINDOW_WIDTH
    config.window_height = DEFAULT_WINDOW_HEIGHT
    config.target_fps = DEFAULT_TARGET_FPS
    config.max_frame_dt = DEFAULT_MAX_FRAME_DT
    config.contact_margin = DEFAULT_CONTACT_MARGIN
    config.wrong_penalty = DEFAULT_WRONG_PENALTY
    config.correct_reward = DEFAULT_CORRECT_REWARD
    config.rng_seed = 0
    return config.data


def ensure_petorka_cfg(base_dir: Path) -> PetorkaConfig:
    path = base_dir / PETORKA_CFG_NAME
    if path.exists():
        data = path.read_bytes()
        if len(data) == PETORKA_CFG_SIZE:
            config = PetorkaConfig(path=path, data=PETORKA_CFG_STRUCT.parse(data))
            # Older files left the timing fields zeroed.
            patched = False
            if config.target_fps <= 0:
                config.target_fps = DEFAULT_TARGET_FPS
                patched = True
            if not (config.max_frame_dt > 0.0):
                config.max_frame_dt = DEFAULT_MAX_FRAME_DT
                patched = True
            if patched:
                config.save()
            return config
    config = PetorkaConfig(path=path, data=default_petorka_cfg_data())
    config.save()
    return config


def load_petorka_cfg(path: Path) -> PetorkaConfig:
    data = path.read_bytes()
    if len(data) != PETORKA_CFG_SIZE:
        raise ValueError(f"{path} has unexpected size {len(data)} (expected {PETORKA_CFG_SIZE})")
    parsed = PETORKA_CFG_STRUCT.parse(data)
    return PetorkaConfig(path=path, data=parsed)
