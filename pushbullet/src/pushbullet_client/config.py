"""
config.py

Endpoints and runtime settings for the Pushbullet client.

Settings are resolved in layers, first match wins:
  timeout:      constructor argument > set_default_timeout() >
                PUSHBULLET_TIMEOUT env var > DEFAULT_TIMEOUT
  access token: constructor argument / YAML settings file >
                PUSHBULLET_TOKEN env var (a .env file is loaded first)

Environment variables (optional):
  PUSHBULLET_TOKEN   -> access token used by the command line entry point
  PUSHBULLET_TIMEOUT -> request timeout in seconds
"""

from __future__ import annotations
import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

BASE_URL = "https://api.pushbullet.com/v2/"
DEVICES_URL = f"{BASE_URL}devices"
PUSHES_URL = f"{BASE_URL}pushes"

DEFAULT_TIMEOUT = 30.0
TOKEN_ENV = "PUSHBULLET_TOKEN"
TIMEOUT_ENV = "PUSHBULLET_TIMEOUT"

_DEFAULT_TIMEOUT_OVERRIDE: Optional[float] = None


def _check_timeout(seconds: float) -> float:
    seconds = float(seconds)
    if seconds <= 0:
        raise ValueError(f"timeout must be a positive number, got {seconds}")
    return seconds


def set_default_timeout(seconds: float | None):
    """Programmatically set the default timeout (overrides env). None resets it."""
    global _DEFAULT_TIMEOUT_OVERRIDE
    _DEFAULT_TIMEOUT_OVERRIDE = None if seconds is None else _check_timeout(seconds)


def resolve_timeout(explicit: float | None = None) -> float:
    """
    Decide the effective request timeout in seconds:
      1) explicit argument if provided (not None)
      2) programmatic global default if set
      3) environment variable PUSHBULLET_TIMEOUT
      4) fallback to DEFAULT_TIMEOUT
    """
    if explicit is not None:
        return _check_timeout(explicit)
    if _DEFAULT_TIMEOUT_OVERRIDE is not None:
        return _DEFAULT_TIMEOUT_OVERRIDE
    env_val = os.environ.get(TIMEOUT_ENV)
    if env_val is not None:
        try:
            return _check_timeout(float(env_val))
        except ValueError:
            logger.warning(
                f"Ignoring invalid {TIMEOUT_ENV}={env_val!r}, "
                f"using {DEFAULT_TIMEOUT}s"
            )
    return DEFAULT_TIMEOUT


def get_access_token() -> str:
    """Read the access token from the environment, loading `.env` first."""
    load_dotenv(find_dotenv(usecwd=True))
    token = os.environ.get(TOKEN_ENV)
    if not token:
        raise KeyError(
            f"couldn't find required environment variable {TOKEN_ENV}"
        )
    return token


class ClientSettings(BaseModel):
    """Contents of a YAML settings file."""
    access_token: str = Field(min_length=1)
    timeout: Optional[float] = Field(default=None, gt=0)


def load_settings(path: str | Path) -> ClientSettings:
    """
    Load client settings from a YAML file such as:

        access_token: o.abc123
        timeout: 10
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at: {path}")
    data = yaml.safe_load(path.read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    logger.debug(f"Loaded settings from {path}")
    return ClientSettings.model_validate(data)
