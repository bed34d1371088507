"""Hydra-based config loading with Pydantic validation.

Flow: Hydra resolves defaults → DictConfig → Pydantic validates → typed config

Usage:
    config = load_config(EvolutionaryMCTSConfig, "configs/agent", "emcts")

    # Or dispatch on the variant field of an agent preset:
    raw = load_raw_config("configs/agent", "mcts", overrides=["k=1.0"])
"""

from __future__ import annotations

from pathlib import Path
from typing import TypeVar

from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra
from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def load_config(
    model_class: type[T],
    config_path: str | Path,
    config_name: str,
    overrides: list[str] | None = None,
) -> T:
    """Load and validate a config using Hydra and Pydantic.

    Args:
        model_class: Pydantic model class to validate against.
        config_path: Path to the configs directory (relative to cwd or absolute).
        config_name: Config file name without .yaml.
        overrides: Hydra-style overrides (e.g., ["max_iterations=50"]).

    Returns:
        Validated config instance.
    """
    return model_class.model_validate(load_raw_config(config_path, config_name, overrides))


def load_raw_config(
    config_path: str | Path,
    config_name: str,
    overrides: list[str] | None = None,
) -> dict:
    """Load a config as a raw dict using Hydra (no Pydantic validation).

    Clears global Hydra state before and after. Not thread-safe.

    Args:
        config_path: Path to the configs directory.
        config_name: Config file name without .yaml.
        overrides: Hydra-style overrides.

    Returns:
        Config as a plain dict.
    """
    config_path = Path(config_path).resolve()

    GlobalHydra.instance().clear()

    try:
        initialize_config_dir(config_dir=str(config_path), version_base=None)
        cfg: DictConfig = compose(
            config_name=config_name,
            overrides=overrides or [],
        )
        return OmegaConf.to_container(cfg, resolve=True)  # type: ignore[return-value]

    finally:
        GlobalHydra.instance().clear()
