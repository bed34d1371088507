"""Configuration module with strict validation and Hydra integration.

This module provides:
- StrictBaseModel: Base class for all configs with extra='forbid'
- load_config(): Hydra-based config loading with Pydantic validation
"""

from __future__ import annotations

from gridmcts.config.base import StrictBaseModel
from gridmcts.config.loader import load_config, load_raw_config

__all__ = [
    "StrictBaseModel",
    "load_config",
    "load_raw_config",
]
