"""Application configuration: settings schema and mdmeta.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "mdmeta.yaml"

# Environment names understood by earlier releases; MDMETA_<FIELD> wins over these.
LEGACY_ENV = {
    "api_key":     "OPENAI_API_KEY",
    "base_url":    "BASE_URL",
    "model":       "MODEL_NAME",
    "max_tokens":  "MAX_TOKENS",
    "temperature": "TEMPERATURE",
}


class Settings(BaseModel):
    app_name:          str = "mdmeta"
    create_if_missing: bool = Field(default=False, description="Create frontmatter in files that lack it")
    max_tags:          int = Field(default=3, ge=1, description="Max tags kept from a generation")
    log_level:         str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    api_key:           Optional[str] = Field(default=None, description="API key for the tag generator")
    base_url:          str = Field(default="https://api.openai.com/v1", description="OpenAI-compatible endpoint")
    model:             str = Field(default="gpt-4-turbo-preview", description="Chat model name")
    max_tokens:        int = Field(default=150, ge=1)
    temperature:       float = Field(default=0.7, ge=0.0, le=2.0)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from mdmeta.yaml, then legacy env names, then MDMETA_<FIELD>, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name, env in LEGACY_ENV.items():
        if val := os.getenv(env):
            data[name] = val

    for name in Settings.model_fields:
        if val := os.getenv(f"MDMETA_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
