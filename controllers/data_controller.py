"""
Data controller helpers that glue the common data-fetching utilities to
the view model.

This module exposes the `FixtureSource` protocol the view model depends on and
`ApiFootballSource`, the implementation backed by the api-sports v3 API:
    - `get_leagues()` returns every league the API knows about.
    - `get_fixtures(day)` returns all fixtures kicking off on that calendar day.

Both calls are read-only and raise `common.utils.ApiError` on failure; the
view model decides what to do with the error. HTTP, JSON parsing and header
handling live in `common.utils` and `common.config`.
"""

from __future__ import annotations
from datetime import date
from typing import List, Optional, Protocol

from common.config import ApiSettings, get_api_settings
from common.utils import fetch_fixtures, fetch_leagues
from models.match_model import Fixture, League


class FixtureSource(Protocol):
    def get_leagues(self) -> List[League]: ...

    def get_fixtures(self, day: date) -> List[Fixture]: ...


class ApiFootballSource:
    def __init__(self, settings: Optional[ApiSettings] = None):
        # Resolve credentials once per source instead of per request
        self.settings = settings or get_api_settings()

    def get_leagues(self) -> List[League]:
        return fetch_leagues(self.settings)

    def get_fixtures(self, day: date) -> List[Fixture]:
        return fetch_fixtures(day, self.settings)
