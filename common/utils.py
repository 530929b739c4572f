"""
Common utility functions for data fetching and lightweight helpers used by
the page and the controllers.

This module contains network helpers (a small requests.Session wrapper),
parsers that turn the API's nested JSON records into the frozen dataclasses
from `models.match_model`, and UI convenience utilities such as
`league_options` (dropdown label -> league id) and `fixtures_frame`, which
prepares the visible page of fixtures for `st.dataframe`.

Nothing here is cached: each call to `fetch_fixtures` hits the API, and the
view model decides when to call it.
"""

# Import libraries
from __future__ import annotations
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
import requests
from loguru import logger

from .config import ApiSettings, get_api_settings
from .constants import ALL_LEAGUES_LABEL, DATE_FORMAT, HTTP_TIMEOUT
from .result import ErrorType
from models.match_model import Fixture, League, Team


class ApiError(Exception):
    """Raised when a call to the football API cannot produce a `response` list."""

    def __init__(self, message: str, error_type: ErrorType = ErrorType.EXTERNAL_API_ERROR,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.details = details or {}


SESSION = requests.Session()


def api_get(path: str, params: Optional[Dict[str, Any]] = None,
            settings: Optional[ApiSettings] = None) -> List[Dict[str, Any]]:
    settings = settings or get_api_settings()
    url = f"{settings.base_url.rstrip('/')}/{path.lstrip('/')}"
    try:
        resp = SESSION.get(url, params=params or {}, headers=settings.headers(), timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ApiError(f"GET {path} failed: {exc}", details={"url": url, "params": params}) from exc

    try:
        data = resp.json()
    except ValueError as exc:
        raise ApiError(f"GET {path} returned invalid JSON", ErrorType.MALFORMED_RESPONSE) from exc

    # api-sports answers HTTP 200 with an `errors` object/list for bad keys,
    # rate limits and invalid parameters.
    errors = data.get("errors") if isinstance(data, dict) else None
    if errors:
        raise ApiError(f"GET {path} rejected: {errors}", ErrorType.API_ERROR, details={"errors": errors})

    results = data.get("response") if isinstance(data, dict) else None
    if not isinstance(results, list):
        raise ApiError(f"GET {path} has no `response` list", ErrorType.MALFORMED_RESPONSE)
    return results


def _int_or_none(val: Any) -> Optional[int]:
    if val is None or val == "":
        return None
    try:
        return int(val)
    except (TypeError, ValueError):
        return None


def parse_team(raw: Optional[Dict[str, Any]]) -> Team:
    raw = raw or {}
    return Team(
        team_id=_int_or_none(raw.get("id")) or 0,
        name=str(raw.get("name") or ""),
        logo=str(raw.get("logo") or ""),
    )


def parse_fixture(raw: Dict[str, Any]) -> Fixture:
    # Defensive extraction: venue, referee and score are often null
    fx = raw.get("fixture", {}) or {}
    venue = fx.get("venue", {}) or {}
    status = fx.get("status", {}) or {}
    teams = raw.get("teams", {}) or {}
    league = raw.get("league", {}) or {}
    fulltime = (raw.get("score", {}) or {}).get("fulltime", {}) or {}

    return Fixture(
        fixture_id=_int_or_none(fx.get("id")) or 0,
        kickoff=str(fx.get("date") or ""),
        timezone=str(fx.get("timezone") or "UTC"),
        status_short=str(status.get("short") or ""),
        status_long=str(status.get("long") or ""),
        venue_name=venue.get("name") or None,
        venue_city=venue.get("city") or None,
        referee=fx.get("referee") or None,
        home=parse_team(teams.get("home")),
        away=parse_team(teams.get("away")),
        league_id=_int_or_none(league.get("id")) or 0,
        league_name=str(league.get("name") or ""),
        league_logo=str(league.get("logo") or ""),
        league_country=str(league.get("country") or ""),
        home_goals=_int_or_none(fulltime.get("home")),
        away_goals=_int_or_none(fulltime.get("away")),
    )


def parse_league(raw: Dict[str, Any]) -> League:
    league = raw.get("league", {}) or {}
    country = raw.get("country", {}) or {}
    return League(
        league_id=_int_or_none(league.get("id")) or 0,
        name=str(league.get("name") or ""),
        league_type=str(league.get("type") or ""),
        logo=str(league.get("logo") or ""),
        country=str(country.get("name") or ""),
    )


def fetch_leagues(settings: Optional[ApiSettings] = None) -> List[League]:
    results = api_get("/leagues", settings=settings)
    leagues = [parse_league(r) for r in results]
    logger.debug(f"Parsed {len(leagues)} leagues")
    return leagues


def fetch_fixtures(day: date, settings: Optional[ApiSettings] = None) -> List[Fixture]:
    results = api_get("/fixtures", params={"date": day.strftime(DATE_FORMAT)}, settings=settings)
    fixtures = [parse_fixture(r) for r in results]
    logger.debug(f"Parsed {len(fixtures)} fixtures for {day:%Y-%m-%d}")
    return fixtures


def league_options(leagues: Iterable[League]) -> Dict[str, Optional[int]]:
    """
    Return an ordered {dropdown label -> league id} mapping.

    The first entry is the "All Leagues" option (id None). League names repeat
    across countries ("Premier League"), so duplicates get the country and,
    failing that, a running counter to keep labels unique.
    """
    options: Dict[str, Optional[int]] = {ALL_LEAGUES_LABEL: None}
    for lg in leagues:
        lab = lg.name
        if lab in options and lg.country:
            lab = f"{lg.name} ({lg.country})"
        if lab in options:
            c = 2
            new_lab = f"{lab} ({c})"
            while new_lab in options:
                c += 1
                new_lab = f"{lab} ({c})"
            lab = new_lab
        options[lab] = lg.league_id
    return options


def format_kickoff(fixture: Fixture, fmt: str = "%H:%M") -> str:
    ts = fixture.kickoff_ts
    if pd.isnull(ts):
        return ""
    # Show in the fixture's own timezone when pandas knows it
    try:
        ts = ts.tz_convert(fixture.timezone)
    except Exception as exc:
        logger.debug(f"Unknown timezone {fixture.timezone!r}: {exc}")
    return ts.strftime(fmt)


def fixtures_frame(fixtures: List[Fixture]) -> pd.DataFrame:
    """Flatten a page of fixtures into the table the page renders."""
    rows = []
    for f in fixtures:
        rows.append({
            "FixtureId": f.fixture_id,
            "HomeLogo": f.home.logo,
            "Home": f.home.name,
            "AwayLogo": f.away.logo,
            "Away": f.away.name,
            "Kickoff": format_kickoff(f),
            "League": f.league_name,
            "Score": f"{f.home_goals} - {f.away_goals}" if f.is_finished else "",
        })
    columns = ["FixtureId", "HomeLogo", "Home", "AwayLogo", "Away", "Kickoff", "League", "Score"]
    return pd.DataFrame(rows, columns=columns)
