"""Configuración global de la aplicación."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from platformdirs import user_config_dir

from .core.errors import ConfigurationError

WORKSHOP_FILE = "workshop.yaml"


@dataclass(frozen=True)
class Config:
    """Configuración inmutable de un taller."""

    # Identidad
    app_name: str = "workshopper"
    title: str = "WORKSHOPPER"
    subtitle: str | None = None

    # Paths
    workshop_dir: Path = field(default_factory=Path.cwd)
    exercises: str = "exercises"
    data_home: Path | None = None
    exercises_dir: Path = field(init=False)
    data_dir: Path = field(init=False)

    # Ejecución
    width: int = 65
    timeout: int = 30

    def __post_init__(self) -> None:
        object.__setattr__(self, "workshop_dir", Path(self.workshop_dir))
        object.__setattr__(self, "exercises_dir", self.workshop_dir / self.exercises)
        # Un directorio de progreso por aplicación
        data_dir = self.data_home or user_config_dir(self.app_name)
        object.__setattr__(self, "data_dir", Path(data_dir))

    @classmethod
    def from_workshop(cls, workshop_dir: Path, **overrides: Any) -> Config:
        """Crear configuración a partir de `workshop.yaml` en la raíz del taller."""
        workshop_dir = Path(workshop_dir)
        workshop_file = workshop_dir / WORKSHOP_FILE
        data: dict[str, Any] = {}

        if workshop_file.exists():
            try:
                with open(workshop_file, "r", encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Invalid workshop file {workshop_file}: {e}") from e
            if loaded is not None and not isinstance(loaded, dict):
                raise ConfigurationError(f"Invalid workshop file {workshop_file}: expected a mapping")
            data = loaded or {}

        kwargs: dict[str, Any] = {"workshop_dir": workshop_dir}
        if "name" in data:
            kwargs["app_name"] = str(data["name"])
        for key in ("title", "subtitle"):
            if key in data:
                kwargs[key] = str(data[key])
        for key in ("width", "timeout"):
            if key in data:
                try:
                    kwargs[key] = int(data[key])
                except (TypeError, ValueError) as e:
                    raise ConfigurationError(f"Invalid `{key}` in {workshop_file}: {data[key]!r}") from e
        if "exercises" in data:
            kwargs["exercises"] = str(data["exercises"])

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)

    @classmethod
    def from_env(cls, workshop_dir: Path | None = None) -> Config:
        """Crear configuración desde variables de entorno."""
        home = workshop_dir or os.getenv("WORKSHOPPER_HOME")
        data_dir = os.getenv("WORKSHOPPER_DATA_DIR")
        timeout = os.getenv("WORKSHOPPER_TIMEOUT")
        try:
            timeout_value = int(timeout) if timeout else None
        except ValueError as e:
            raise ConfigurationError(f"Invalid WORKSHOPPER_TIMEOUT: {timeout!r}") from e

        return cls.from_workshop(
            Path(home) if home else Path.cwd(),
            data_home=Path(data_dir) if data_dir else None,
            timeout=timeout_value,
        )

    def ensure_dirs(self) -> None:
        """Crear directorios necesarios si no existen."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


# Instancia global
_config: Config | None = None


def get_config() -> Config:
    """Obtener instancia de configuración (singleton)."""
    global _config
    if _config is None:
        _config = Config.from_env()
        _config.ensure_dirs()
    return _config


def set_config(config: Config | None) -> None:
    """Establecer configuración (para tests y para el CLI)."""
    global _config
    _config = config
    if _config is not None:
        _config.ensure_dirs()
