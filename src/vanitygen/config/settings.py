"""
Runtime settings loaded from the environment and a project .env file.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class Settings(BaseModel):
    """
    Defaults for the command line, read from environment variables.

    Attributes:
        input_dir: Directory holding index.tmpl, project.tmpl and vanity.yml.
        output_dir: Directory that receives the generated site.
        log_level: Logging level name overriding the --log-level option.
    """
    input_dir: Optional[Path] = Field(default=None, alias="VANITYGEN_IN")
    output_dir: Optional[Path] = Field(default=None, alias="VANITYGEN_OUT")
    log_level: Optional[str] = Field(default=None, alias="VANITYGEN_LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings from environment/.env exactly once.
    """
    values = {field.alias: os.getenv(field.alias) or None for field in Settings.model_fields.values()}
    return Settings(**values)
