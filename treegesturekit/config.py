from __future__ import annotations
import yaml
from pathlib import Path
from typing import Dict, Optional
from pydantic import BaseModel, Field

class FeatureConfig(BaseModel):
    extension_multiplier: float = 1.2
    thumb_distance: float = 0.2
    # tight on purpose, a closed fist brings thumb and index close too
    pinch_threshold: float = 0.08

class StabilizerConfig(BaseModel):
    window: int = Field(5, ge=1)

class FocusConfig(BaseModel):
    distance: float = 2.5
    offsets: Dict[str, float] = {"gift": 0.3, "frame": 0.05}
    scales: Dict[str, float] = {"gift": 0.40, "frame": 0.45}

class MotionConfig(BaseModel):
    targeted_speed: float = 3.5
    resting_speed: float = 1.5
    targeted_turn_speed: float = 3.0
    resting_turn_speed: float = 2.0
    breathing_amplitude: float = 0.2
    breathing_frequency: float = 1.5
    spin_rate: float = 0.2
    sway_amplitude: float = 0.05
    lid_open_angle: float = -1.7453292519943295  # -pi/1.8
    lid_speed: float = 3.0
    paper_speed: float = 4.0
    paper_raised: float = 1.2
    paper_lowered: float = 0.5

class PoolConfig(BaseModel):
    gifts: int = Field(30, ge=0)
    frames: int = Field(15, ge=0)
    history_ratio: float = Field(0.5, gt=0.0, le=1.0)
    seed: Optional[int] = None

class ControllerConfig(BaseModel):
    features: FeatureConfig = Field(default_factory=FeatureConfig)
    stabilizer: StabilizerConfig = Field(default_factory=StabilizerConfig)
    focus: FocusConfig = Field(default_factory=FocusConfig)
    motion: MotionConfig = Field(default_factory=MotionConfig)
    pool: PoolConfig = Field(default_factory=PoolConfig)

def load_config(path: str|Path|None) -> ControllerConfig:
    """Read a YAML config; missing path or empty file gives the defaults."""
    if not path or not Path(path).exists():
        return ControllerConfig()
    with open(path,"r") as f: cfg=yaml.safe_load(f) or {}
    return ControllerConfig.model_validate(cfg)
