"""Channel-gated logging for the procedural generators.

Each generator family writes to its own channel under the ``spacevoxel``
logger namespace. Channels are switched on or off from ``settings.json``.
"""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

ROOT_LOGGER = "spacevoxel"

MATERIALS = "materials"
VISUALS = "visuals"
PROPULSION = "propulsion"
MESH = "mesh"

DEFAULT_CHANNELS = {
    MATERIALS: True,
    VISUALS: False,
    PROPULSION: True,
    MESH: False,
}


def _qualified(name: str) -> str:
    return f"{ROOT_LOGGER}.{name}"


@dataclass
class LoggerConfig:
    """Level plus per-channel switches."""

    level: int = logging.INFO
    channels: Dict[str, bool] = field(default_factory=lambda: DEFAULT_CHANNELS.copy())

    @classmethod
    def from_dict(cls, data: Mapping) -> "LoggerConfig":
        level_name = str(data.get("logLevel", "INFO")).upper()
        level = getattr(logging, level_name, logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO
        channels = DEFAULT_CHANNELS.copy()
        for name, enabled in dict(data.get("logChannels", {})).items():
            channels[str(name)] = bool(enabled)
        return cls(level=level, channels=channels)

    @classmethod
    def from_settings(cls, settings_path: Path) -> "LoggerConfig":
        if not settings_path.exists():
            return cls()
        try:
            data = json.loads(settings_path.read_text())
        except json.JSONDecodeError:
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data)


class ChannelLogger:
    """One named channel; records are dropped while it is disabled."""

    def __init__(self, name: str, enabled: bool = True, logger: Optional[logging.Logger] = None) -> None:
        self._name = name
        self._enabled = enabled
        self._logger = logger or logging.getLogger(_qualified(name))

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    def _emit(self, level: int, msg: str, *args, **kwargs) -> None:
        if self._enabled:
            self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._emit(logging.ERROR, msg, *args, **kwargs)


class ProcgenLogger:
    """Registry of generator channels built from a :class:`LoggerConfig`."""

    def __init__(self, config: Optional[LoggerConfig] = None) -> None:
        config = config or LoggerConfig()
        logging.basicConfig(
            level=config.level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            stream=sys.stdout,
        )
        logging.getLogger(ROOT_LOGGER).setLevel(config.level)
        self._channels: Dict[str, ChannelLogger] = {
            name: ChannelLogger(name, enabled) for name, enabled in config.channels.items()
        }

    def channel(self, name: str) -> ChannelLogger:
        # Channels missing from settings stay quiet until enabled.
        if name not in self._channels:
            self._channels[name] = ChannelLogger(name, enabled=False)
        return self._channels[name]

    def set_enabled(self, name: str, enabled: bool) -> None:
        self.channel(name).enabled = enabled

    def channels(self) -> Iterable[str]:
        return self._channels.keys()


def channel_of(logger: Optional[ProcgenLogger], name: str) -> Optional[ChannelLogger]:
    """``logger.channel(name)``, or ``None`` when logging is not wired up."""

    return logger.channel(name) if logger is not None else None


def init_logger(settings_path: Optional[Path] = None) -> ProcgenLogger:
    """Build the generator logger from ``settings.json``."""

    return ProcgenLogger(LoggerConfig.from_settings(settings_path or Path("settings.json")))


__all__ = [
    "ChannelLogger",
    "DEFAULT_CHANNELS",
    "LoggerConfig",
    "MATERIALS",
    "MESH",
    "PROPULSION",
    "ProcgenLogger",
    "ROOT_LOGGER",
    "VISUALS",
    "channel_of",
    "init_logger",
]
