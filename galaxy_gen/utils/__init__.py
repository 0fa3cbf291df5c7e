"""Utility functions for reproducibility and configuration."""

from galaxy_gen.utils.reproducibility import create_random_source
from galaxy_gen.utils.config import load_config, save_config, Config

__all__ = ["create_random_source", "load_config", "save_config", "Config"]
