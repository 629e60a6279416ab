"""
Configuration settings for asynchof.
"""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Reporter settings loaded from config file and environment."""

    model_config = SettingsConfigDict(env_prefix="ASYNCHOF_", case_sensitive=True)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None
    LOG_VERBOSE: int = 1
    REPORTER_NAME: str = "asynchof"


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority: Environment variables > config file > defaults
    """
    config_dict = {}
    if config_path is not None and Path(config_path).exists():
        with open(config_path, "r") as f:
            yaml_config = yaml.safe_load(f)
            if yaml_config:
                config_dict = yaml_config

    prefix = Settings.model_config.get("env_prefix", "")
    file_only = {
        key: value
        for key, value in config_dict.items()
        if f"{prefix}{key}" not in os.environ
    }
    return Settings(**file_only)
