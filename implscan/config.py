"""Configuration models for ImplScan."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

import typer
import yaml
from pydantic import AliasChoices, BaseModel, Field, field_validator

DEFAULT_CONFIG_NAME = "implscan.yaml"


def split_interface_names(value: str) -> list[str]:
    """Split a comma-separated interface list, trimming each name."""
    return [part.strip() for part in value.split(",") if part.strip()]


class ScrapeConfig(BaseModel):
    solution: str = Field(validation_alias=AliasChoices("solution", "solution_file"))
    output: str
    interfaces: List[str] = Field(validation_alias=AliasChoices("interfaces", "inspect_interfaces"))
    ignore: List[str] = Field(default_factory=list)
    encoding: str = "utf-8-sig"
    eof_fallback: bool = False
    wrap_items: bool = False
    max_workers: int = Field(default=1, ge=1)
    log_level: str = "INFO"

    @field_validator("interfaces", mode="before")
    @classmethod
    def _split_interfaces(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_interface_names(value)
        if isinstance(value, list):
            return [str(item).strip() for item in value if str(item).strip()]
        return value


def load_yaml_config(config_path: Path | None) -> dict[str, object]:
    """Return the mapping stored in a YAML config file, or ``{}`` when absent."""
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not config_path.exists():
            return {}
    if not config_path.exists():
        raise typer.BadParameter(f"Config file not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as error:
        raise typer.BadParameter(f"Failed to parse {config_path}: {error}") from error
    if not isinstance(data, dict):
        raise typer.BadParameter(f"{config_path.name} must contain a mapping")
    return data


def merge_config(file_overrides: dict[str, object], cli_options: dict[str, object]) -> ScrapeConfig:
    """Layer CLI options (ignoring unset ones) over file values."""
    merged: dict[str, object] = dict(file_overrides)
    for alias, key in (("solution_file", "solution"), ("inspect_interfaces", "interfaces")):
        if alias in merged and key not in merged:
            merged[key] = merged.pop(alias)
        else:
            merged.pop(alias, None)
    for key, value in cli_options.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)) and not value:
            continue
        merged[key] = value
    if merged.get("ignore") is None:
        merged["ignore"] = []
    return ScrapeConfig(**merged)


__all__ = ["DEFAULT_CONFIG_NAME", "ScrapeConfig", "load_yaml_config", "merge_config", "split_interface_names"]
