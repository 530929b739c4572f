"""
API settings for the football data source.

Values are looked up in Streamlit secrets first (an `[api_football]` table in
`.streamlit/secrets.toml`), then in environment variables, which `main.py`
fills from a local `.env` via `python-dotenv`.

    API_FOOTBALL_KEY   the api-sports / RapidAPI key (required for real calls)
    API_FOOTBALL_HOST  value of the `x-rapidapi-host` header
    API_FOOTBALL_URL   base URL of the v3 API
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Dict

import streamlit as st
from loguru import logger

from .constants import API_HOST, BASE_URL


@dataclass(frozen=True)
class ApiSettings:
    base_url: str
    api_key: str
    host: str

    def headers(self) -> Dict[str, str]:
        return {"x-rapidapi-key": self.api_key, "x-rapidapi-host": self.host}


def _get_secrets() -> Dict[str, str]:
    try:
        if "api_football" in st.secrets:
            return dict(st.secrets["api_football"])
    except Exception as exc:  # no secrets.toml outside `streamlit run`
        logger.debug(f"No Streamlit secrets available: {exc}")
    return {}


def get_api_settings() -> ApiSettings:
    secrets = _get_secrets()
    api_key = secrets.get("key") or os.getenv("API_FOOTBALL_KEY", "")
    if not api_key:
        logger.warning("API_FOOTBALL_KEY is not set; requests will be rejected by the API")
    return ApiSettings(
        base_url=secrets.get("url") or os.getenv("API_FOOTBALL_URL", BASE_URL),
        api_key=api_key,
        host=secrets.get("host") or os.getenv("API_FOOTBALL_HOST", API_HOST),
    )
