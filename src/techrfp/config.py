"""Runtime settings from an optional YAML file and environment variables."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from techrfp.connectors.samgov.constants import DEFAULT_BASE_URL

# Environment variable -> settings field
_ENV_FIELDS: dict[str, str] = {
    "SAM_GOV_API_KEY": "sam_gov_api_key",
    "TECHRFP_SAM_GOV_BASE_URL": "sam_gov_base_url",
    "TECHRFP_REQUEST_TIMEOUT": "request_timeout",
    "TECHRFP_PRIORITY_CATEGORY": "priority_category",
    "TECHRFP_DB": "db_path",
}


class Settings(BaseModel):
    """Settings for ingestion and storage."""

    sam_gov_api_key: Optional[str] = None
    sam_gov_base_url: str = DEFAULT_BASE_URL
    request_timeout: float = Field(default=30.0, gt=0)
    priority_category: str = Field(default="Drupal", min_length=1)
    db_path: Path = Path("techrfp.db")

    ingest_queries: list[str] = Field(
        default_factory=lambda: [
            "website",
            "software development",
            "web application",
            "information technology",
        ]
    )
    days_back: int = Field(default=30, ge=0)
    days_forward: int = Field(default=120, ge=0)
    page_limit: int = Field(default=50, gt=0, le=1000)
    max_pages: int = Field(default=1, gt=0)


def load_settings(
    path: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Load settings: YAML file first (path, else $TECHRFP_CONFIG), then
    environment overrides. Unset values keep their defaults.
    """
    env = os.environ if environ is None else environ
    path = path or env.get("TECHRFP_CONFIG")

    data: dict = {}
    if path:
        loaded = yaml.safe_load(Path(path).read_text()) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        data.update(loaded)

    for env_name, field_name in _ENV_FIELDS.items():
        value = env.get(env_name)
        if value:
            data[field_name] = value

    return Settings.model_validate(data)
