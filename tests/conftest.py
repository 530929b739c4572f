"""Shared fixtures: model factories and an in-memory fixture source."""

from datetime import date
from typing import Dict, List, Optional

import pytest

from common.result import ErrorType
from common.utils import ApiError
from models.match_model import Fixture, League, Team

TODAY = date(2024, 5, 19)


def _make_fixture(
    fixture_id: int,
    home: str,
    away: str = "Opponent FC",
    league_id: int = 39,
    league_name: str = "Premier League",
    home_goals: Optional[int] = None,
    away_goals: Optional[int] = None,
    **kwargs,
) -> Fixture:
    return Fixture(
        fixture_id=fixture_id,
        kickoff=kwargs.pop("kickoff", "2024-05-19T15:00:00+00:00"),
        home=Team(team_id=fixture_id * 10, name=home, logo=f"https://media.example/teams/{home}.png"),
        away=Team(team_id=fixture_id * 10 + 1, name=away, logo=f"https://media.example/teams/{away}.png"),
        league_id=league_id,
        league_name=league_name,
        home_goals=home_goals,
        away_goals=away_goals,
        **kwargs,
    )


class FakeSource:
    """FixtureSource backed by dicts; records every call it receives."""

    def __init__(self, leagues: Optional[List[League]] = None,
                 fixtures_by_day: Optional[Dict[date, List[Fixture]]] = None):
        self.leagues = leagues or []
        self.fixtures_by_day = fixtures_by_day or {}
        self.fail_leagues = False
        self.fail_fixtures = False
        self.league_calls = 0
        self.fixture_calls: List[date] = []

    def get_leagues(self) -> List[League]:
        self.league_calls += 1
        if self.fail_leagues:
            raise ApiError("GET /leagues failed: connection refused")
        return list(self.leagues)

    def get_fixtures(self, day: date) -> List[Fixture]:
        self.fixture_calls.append(day)
        if self.fail_fixtures:
            raise ApiError("GET /fixtures rejected: {'token': 'bad key'}", ErrorType.API_ERROR)
        return list(self.fixtures_by_day.get(day, []))


@pytest.fixture
def make_fixture():
    return _make_fixture


@pytest.fixture
def leagues():
    return [
        League(league_id=39, name="Premier League", league_type="League", country="England"),
        League(league_id=140, name="La Liga", league_type="League", country="Spain"),
        League(league_id=2, name="UEFA Champions League", league_type="Cup", country="World"),
    ]


@pytest.fixture
def todays_fixtures():
    return [
        _make_fixture(1, "Arsenal", "Everton", home_goals=2, away_goals=1),
        _make_fixture(2, "Chelsea", "Fulham"),
        _make_fixture(3, "Arsenal", "Brentford"),
        _make_fixture(4, "Real Madrid", "Sevilla", league_id=140, league_name="La Liga"),
        _make_fixture(5, "Barcelona", "Valencia", league_id=140, league_name="La Liga"),
    ]


@pytest.fixture
def source(leagues, todays_fixtures):
    return FakeSource(leagues=leagues, fixtures_by_day={TODAY: todays_fixtures})


@pytest.fixture
def today():
    return TODAY
