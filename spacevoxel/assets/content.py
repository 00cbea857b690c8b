"""Asset loading entry point."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from spacevoxel.engine.logger import MATERIALS, ProcgenLogger, channel_of
from spacevoxel.materials.generator import MaterialGenerator
from spacevoxel.materials.planet import PlanetDatabase
from spacevoxel.materials.templates import TemplateDatabase

PACKAGE_ROOT = Path(__file__).resolve().parent


class ContentManager:
    """Authored templates and planet profiles under ``root/data``."""

    def __init__(self, root: Optional[Path] = None, logger: Optional[ProcgenLogger] = None) -> None:
        self.root = Path(root) if root is not None else PACKAGE_ROOT
        self.logger = logger
        materials_log = channel_of(logger, MATERIALS)
        self.templates = TemplateDatabase(log=materials_log)
        self.planets = PlanetDatabase(log=materials_log)

    def load(self) -> None:
        self.templates.load_directory(self.root / "data" / "templates")
        self.planets.load_directory(self.root / "data" / "planets")

    def material_generator(self) -> MaterialGenerator:
        return MaterialGenerator(self.templates, logger=self.logger)


__all__ = ["ContentManager", "PACKAGE_ROOT"]
