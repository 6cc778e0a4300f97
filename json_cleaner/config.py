"""
Runtime settings, read from the environment (and a local .env file if present).

Variables:
    JSON_CLEANER_ENCODING   Text encoding for input and output (default: utf-8)
    JSON_CLEANER_INDENT     Indentation used when printing duplicate entries (default: 2)
    JSON_CLEANER_LOG_LEVEL  Root log level (default: INFO)
"""

import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from .errors import UsageError

ENV_PREFIX = "JSON_CLEANER_"


class Settings(BaseModel):
    encoding: str = "utf-8"
    indent: int = 2
    log_level: str = "INFO"

    @field_validator("indent")
    @classmethod
    def indent_not_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("indent must be >= 0")
        return value

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{value}'")
        return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from JSON_CLEANER_* variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ after loading .env.

    Raises:
        UsageError: If a variable holds an invalid value
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    values = {}
    for field in Settings.model_fields:
        raw = environ.get(ENV_PREFIX + field.upper())
        if raw is not None and raw.strip() != "":
            values[field] = raw.strip()

    try:
        return Settings(**values)
    except ValidationError as e:
        raise UsageError(f"Invalid configuration: {e}")
