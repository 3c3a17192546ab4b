from __future__ import annotations

from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .catalog import catalog_kinds


Scalar = Union[bool, int, float, str]

KEY_PREFIX = "synthetic"

# Defaults applied when a platform's namespaced entry is missing.
CPU_MHZ_DEFAULT = 3000
CPU_CORES_DEFAULT = 1
HDFS_MS_PER_MB_DEFAULT = 100.0
STRETCH_DEFAULT = 1.0
FIX_COSTS_DEFAULT = 0.0
COSTS_PER_MS_DEFAULT = 1.0


def platform_key(configuration_name: str, suffix: str) -> str:
    return f"{KEY_PREFIX}.{configuration_name}.{suffix}"


class Configuration(BaseModel):
    """Flat key/value configuration read by the platform cost converters."""

    properties: dict[str, Scalar] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def get_long_property(self, key: str, default: int) -> int:
        value = self.properties.get(key)
        if value is None:
            return default
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"Property {key} is not an integer: {value!r}")
            return int(value)
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Property {key} is not an integer: {value!r}") from exc

    def get_double_property(self, key: str, default: float) -> float:
        value = self.properties.get(key)
        if value is None:
            return default
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Property {key} is not a number: {value!r}") from exc

    def with_properties(self, **updates: Scalar) -> "Configuration":
        return Configuration(properties={**self.properties, **updates})

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Configuration":
        return cls(properties=_flatten(data))

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Configuration":
        data = _load_yaml(path)
        try:
            return cls.from_mapping(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid configuration: {path}\n{exc}") from exc


class HarnessConfig(BaseModel):
    num_platforms: int = Field(..., ge=1)
    ccg_density: float = Field(0.0, ge=0.0, le=1.0)
    seed: int | None = None
    operators: list[str] | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("operators")
    @classmethod
    def _validate_operators(cls, v: list[str] | None) -> list[str] | None:
        if v is None or v == ["*"]:
            return v
        known = set(catalog_kinds())
        unknown = [name for name in v if name not in known]
        if unknown:
            raise ValueError(f"unknown operators: {', '.join(unknown)}")
        return v

    @property
    def configuration(self) -> Configuration:
        return Configuration.from_mapping(self.properties)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "HarnessConfig":
        data = _load_yaml(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid harness config: {path}\n{exc}") from exc


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat


def _load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))
    try:
        return yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:  # pragma: no cover
        raise ValueError(f"Failed to parse YAML: {p}") from exc
