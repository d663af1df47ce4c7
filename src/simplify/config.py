"""TOML config loading for simplify.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "simplify.toml"


@dataclass
class PathsConfig:
    source_directories: list[str] = field(default_factory=lambda: ["src"])
    exclude: list[str] = field(default_factory=list)


@dataclass
class AnalysisConfig:
    expect_nan: bool = False


@dataclass
class FixConfig:
    max_passes: int = 10


@dataclass
class SimplifyConfig:
    paths: PathsConfig = field(default_factory=PathsConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    fix: FixConfig = field(default_factory=FixConfig)
    root: Path = field(default_factory=Path.cwd)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find simplify.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> SimplifyConfig:
    """Parse a simplify.toml file into a SimplifyConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = SimplifyConfig(root=path.resolve().parent)

    if "paths" in data:
        pth = data["paths"]
        config.paths = PathsConfig(
            source_directories=pth.get("source_directories", ["src"]),
            exclude=pth.get("exclude", []),
        )

    if "analysis" in data:
        config.analysis = AnalysisConfig(
            expect_nan=data["analysis"].get("expect_nan", False),
        )

    if "fix" in data:
        config.fix = FixConfig(
            max_passes=data["fix"].get("max_passes", 10),
        )

    return config


def config_for(start_path: Path | None = None) -> SimplifyConfig:
    """The configuration governing ``start_path``, or defaults when there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return SimplifyConfig()
