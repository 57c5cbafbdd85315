from __future__ import annotations
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ValidationError

from pingsim.simulator.config import DEFAULT_COUNT, DEFAULT_SIZE
from pingsim.simulator.errors import SettingsError

CONFIG_ENV = "PINGSIM_CONFIG"

class PacingSettings(BaseModel):
    enabled: bool = True
    time_scale: float = Field(1.0, ge=0.0, description="Multiplier applied to every simulated pause")

class SessionDefaults(BaseModel):
    count: int = DEFAULT_COUNT
    size: int = DEFAULT_SIZE
    trace: bool = False
    stable: bool = True

class SimulatorSettings(BaseModel):
    pacing: PacingSettings = Field(default_factory=PacingSettings)
    defaults: SessionDefaults = Field(default_factory=SessionDefaults)
    log_level: str = "WARNING"

def settings_path(explicit: str | Path | None = None) -> Optional[Path]:
    if explicit:
        return Path(explicit)
    env = os.getenv(CONFIG_ENV)
    return Path(env) if env else None

def load_settings(path: str | Path | None = None) -> SimulatorSettings:
    p = settings_path(path)
    if p is None:
        return SimulatorSettings()
    try:
        data: Dict[str, Any] = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise SettingsError(f"cannot read settings file {p}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SettingsError(f"settings file {p} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"settings file {p} must contain a mapping")
    try:
        return SimulatorSettings(**data)
    except ValidationError as exc:
        raise SettingsError(f"invalid settings in {p}: {exc}") from exc
