# src/tetris_engine/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml
from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from tetris_engine.config.game import GameConfig


def _container(cfg: DictConfig, *, where: str) -> dict[str, Any]:
    data = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(data, dict):
        raise TypeError(f"{where} must resolve to a mapping")
    return data


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        return _container(cfg, where="config")
    if isinstance(cfg, Mapping):
        return dict(cfg)
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_yaml(path: Path, *, overrides: Sequence[str] = ()) -> dict[str, Any]:
    """
    Load a YAML file with OmegaConf (interpolations resolved).

    `overrides` are dotlist entries such as "game.width=8", merged on top of the file.
    """
    cfg = OmegaConf.load(Path(path))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    if not isinstance(cfg, DictConfig):
        raise TypeError(f"config({path}) must be a mapping")
    return _container(cfg, where=f"config({path})")


def parse_game_config(data: Mapping[str, Any]) -> GameConfig:
    """
    Accept either a full document with a top-level 'game:' mapping or the game mapping itself.
    """
    node = data.get("game", data)
    if node is None:
        node = {}
    if not isinstance(node, Mapping):
        raise TypeError(f"cfg.game must be a mapping, got {type(node)!r}")
    return GameConfig.model_validate(dict(node))


def load_game_config(path: Path, *, overrides: Sequence[str] = ()) -> GameConfig:
    return parse_game_config(load_yaml(path, overrides=overrides))


def save_yaml(cfg: Any, path: Path) -> Path:
    """Write cfg as YAML under a top-level 'game:' key (GameConfig) or as-is (mappings)."""
    data = to_plain_dict(cfg)
    if isinstance(cfg, GameConfig):
        data = {"game": data}
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False)
    return out


__all__ = ["load_game_config", "load_yaml", "parse_game_config", "save_yaml", "to_plain_dict"]
