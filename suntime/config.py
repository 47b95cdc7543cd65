"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .solar import TWILIGHT_ANGLES

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_TWILIGHT = "official"


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    cors_origins: Tuple[str, ...] = field(default_factory=tuple)
    default_twilight: str = DEFAULT_TWILIGHT


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from ``SUNTIME_*`` variables.

    Raises ``ValueError`` for an unknown log level or twilight selector.
    """

    env = os.environ if environ is None else environ

    log_level = env.get("SUNTIME_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown SUNTIME_LOG_LEVEL: {log_level}")

    origins = tuple(
        origin.strip()
        for origin in env.get("SUNTIME_CORS_ORIGINS", "").split(",")
        if origin.strip()
    )

    twilight = env.get("SUNTIME_DEFAULT_TWILIGHT", DEFAULT_TWILIGHT).strip().lower()
    if twilight not in TWILIGHT_ANGLES:
        raise ValueError(f"Unsupported SUNTIME_DEFAULT_TWILIGHT: {twilight}")

    return Settings(log_level=log_level, cors_origins=origins, default_twilight=twilight)
