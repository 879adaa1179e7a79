"""Runtime settings.

Values come from ``SHOPCAT_*`` environment variables, with a ``.env``
file in the working directory loaded first.  The image-host client id is
a credential: it is only ever read from the environment and is kept in a
``SecretStr`` so it never shows up in reprs or logs.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, SecretStr

from shopcat.application.catalog_cache import DEFAULT_SELECTION_POLICY, SelectionPolicy

logger = logging.getLogger(__name__)

ENV_PREFIX = "SHOPCAT_"


def _default_home() -> Path:
    return Path.home() / ".shopcat"


class Settings(BaseModel):
    """Validated configuration for the composition root."""

    data_dir: Path = Field(default_factory=lambda: _default_home() / "data")
    cache_dir: Path = Field(default_factory=lambda: _default_home() / "cache")
    feed_collection: str = Field(default="products", min_length=1)
    store_collection: str = Field(default="products", min_length=1)
    imgur_client_id: Optional[SecretStr] = None
    imgur_base_url: str = "https://api.imgur.com"
    upload_timeout_seconds: float = Field(default=30.0, gt=0)
    feed_poll_interval_seconds: float = Field(default=1.0, gt=0)
    background_workers: int = Field(default=4, ge=1, le=32)
    selection_policy: SelectionPolicy = DEFAULT_SELECTION_POLICY
    refresh_after_create: bool = False
    log_level: str = "WARNING"


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Build Settings from the environment.

    Raises pydantic.ValidationError if a variable has an invalid value.
    """
    load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True))

    values = {}
    for name in Settings.model_fields:
        raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw != "":
            values[name] = raw

    settings = Settings(**values)
    if settings.imgur_client_id is None:
        logger.warning(
            "%sIMGUR_CLIENT_ID is not set; image uploads will be rejected", ENV_PREFIX
        )
    return settings
