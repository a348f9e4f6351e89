"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:     str = "mdwiki"
    content_dir:  str = Field(default="content", description="Root directory holding one folder per category")
    store:        str = Field(default="fs", pattern="^(fs|sql)$", description="Backing store: fs or sql")
    db_url:       str = "sqlite:///mdwiki.db"
    output_dir:   str = Field(default="public", description="Directory for generated JSON artifacts")
    base_url:     str = Field(default="/", description="Path prefix for breadcrumbs and graph routes")
    related_limit:      int = Field(default=3,   ge=1, description="Max related articles per page")
    related_tags_limit: int = Field(default=5,   ge=1, description="Max related tags per tag page")
    max_headings:       int = Field(default=10,  ge=0, description="Max headings per search entry; 0 = unlimited")
    words_per_minute:   int = Field(default=200, ge=1, description="Reading speed for computed reading time")
    log_level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDWIKI_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDWIKI_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
