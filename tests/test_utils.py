"""Tests for API access, JSON parsing and table helpers in common.utils."""

from datetime import date
from unittest.mock import Mock, patch

import pandas as pd
import pytest
import requests

from common import utils
from common.config import ApiSettings
from common.constants import ALL_LEAGUES_LABEL
from common.result import ErrorType
from common.utils import ApiError, api_get, fetch_fixtures, fetch_leagues, league_options
from models.match_model import League

SETTINGS = ApiSettings(base_url="https://api.example/", api_key="test-key", host="api.example")

RAW_FIXTURE = {
    "fixture": {
        "id": 1035037,
        "referee": "M. Oliver",
        "timezone": "UTC",
        "date": "2024-05-19T15:00:00+00:00",
        "venue": {"id": 494, "name": "Emirates Stadium", "city": "London"},
        "status": {"long": "Match Finished", "short": "FT", "elapsed": 90},
    },
    "league": {"id": 39, "name": "Premier League", "country": "England",
               "logo": "https://media.example/leagues/39.png", "season": 2023},
    "teams": {
        "home": {"id": 42, "name": "Arsenal", "logo": "https://media.example/teams/42.png"},
        "away": {"id": 45, "name": "Everton", "logo": "https://media.example/teams/45.png"},
    },
    "goals": {"home": 2, "away": 1},
    "score": {"halftime": {"home": 1, "away": 1}, "fulltime": {"home": 2, "away": 1}},
}

RAW_UPCOMING = {
    "fixture": {"id": 1035100, "referee": None, "date": "2024-05-19T19:00:00+00:00",
                "venue": {"id": None, "name": None, "city": None}, "status": {"short": "NS"}},
    "league": {"id": 140, "name": "La Liga"},
    "teams": {"home": {"id": 541, "name": "Real Madrid"}, "away": {"id": 536, "name": "Sevilla"}},
    "score": {"fulltime": {"home": None, "away": None}},
}

RAW_LEAGUE = {
    "league": {"id": 39, "name": "Premier League", "type": "League",
               "logo": "https://media.example/leagues/39.png"},
    "country": {"name": "England", "code": "GB"},
    "seasons": [],
}


def _response(payload=None, status=200, json_error=False):
    resp = Mock()
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Client Error")
    if json_error:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = payload
    return resp


class TestApiGet:
    def test_returns_response_list(self):
        with patch.object(utils.SESSION, "get", return_value=_response({"errors": [], "response": [1, 2]})) as get:
            assert api_get("/fixtures", {"date": "2024-05-19"}, settings=SETTINGS) == [1, 2]

        args, kwargs = get.call_args
        assert args[0] == "https://api.example/fixtures"
        assert kwargs["params"] == {"date": "2024-05-19"}
        assert kwargs["headers"] == {"x-rapidapi-key": "test-key", "x-rapidapi-host": "api.example"}
        assert kwargs["timeout"] == (10, 20)

    def test_network_error(self):
        with patch.object(utils.SESSION, "get", side_effect=requests.ConnectionError("unreachable")):
            with pytest.raises(ApiError) as exc_info:
                api_get("/leagues", settings=SETTINGS)
        assert exc_info.value.error_type == ErrorType.EXTERNAL_API_ERROR

    def test_http_error_status(self):
        with patch.object(utils.SESSION, "get", return_value=_response(status=500)):
            with pytest.raises(ApiError) as exc_info:
                api_get("/leagues", settings=SETTINGS)
        assert exc_info.value.error_type == ErrorType.EXTERNAL_API_ERROR

    def test_errors_payload(self):
        payload = {"errors": {"token": "Error/Missing application key."}, "response": []}
        with patch.object(utils.SESSION, "get", return_value=_response(payload)):
            with pytest.raises(ApiError) as exc_info:
                api_get("/leagues", settings=SETTINGS)
        assert exc_info.value.error_type == ErrorType.API_ERROR
        assert exc_info.value.details["errors"] == payload["errors"]

    def test_invalid_json(self):
        with patch.object(utils.SESSION, "get", return_value=_response(json_error=True)):
            with pytest.raises(ApiError) as exc_info:
                api_get("/leagues", settings=SETTINGS)
        assert exc_info.value.error_type == ErrorType.MALFORMED_RESPONSE

    def test_missing_response_list(self):
        with patch.object(utils.SESSION, "get", return_value=_response({"errors": []})):
            with pytest.raises(ApiError) as exc_info:
                api_get("/leagues", settings=SETTINGS)
        assert exc_info.value.error_type == ErrorType.MALFORMED_RESPONSE


class TestParsing:
    def test_parse_finished_fixture(self):
        f = utils.parse_fixture(RAW_FIXTURE)
        assert f.fixture_id == 1035037
        assert f.label == "Arsenal vs Everton"
        assert f.home.logo == "https://media.example/teams/42.png"
        assert (f.venue_name, f.venue_city, f.referee) == ("Emirates Stadium", "London", "M. Oliver")
        assert (f.league_id, f.league_name, f.league_country) == (39, "Premier League", "England")
        assert (f.home_goals, f.away_goals) == (2, 1)
        assert f.is_finished
        assert f.status_short == "FT"

    def test_parse_upcoming_fixture(self):
        f = utils.parse_fixture(RAW_UPCOMING)
        assert f.venue_name is None and f.venue_city is None and f.referee is None
        assert f.home_goals is None and f.away_goals is None
        assert not f.is_finished
        assert f.home.logo == ""

    def test_parse_league(self):
        lg = utils.parse_league(RAW_LEAGUE)
        assert lg == League(league_id=39, name="Premier League", league_type="League",
                            logo="https://media.example/leagues/39.png", country="England")

    def test_fetch_fixtures_sends_date(self):
        with patch.object(utils, "api_get", return_value=[RAW_FIXTURE, RAW_UPCOMING]) as api:
            fixtures = fetch_fixtures(date(2024, 5, 19), settings=SETTINGS)
        api.assert_called_once_with("/fixtures", params={"date": "2024-05-19"}, settings=SETTINGS)
        assert [f.fixture_id for f in fixtures] == [1035037, 1035100]

    def test_fetch_leagues(self):
        with patch.object(utils, "api_get", return_value=[RAW_LEAGUE]):
            assert [lg.league_id for lg in fetch_leagues(settings=SETTINGS)] == [39]


class TestLeagueOptions:
    def test_all_leagues_first(self):
        options = league_options([League(39, "Premier League"), League(140, "La Liga")])
        assert list(options.items()) == [
            (ALL_LEAGUES_LABEL, None), ("Premier League", 39), ("La Liga", 140),
        ]

    def test_duplicate_names_are_made_unique(self):
        options = league_options([
            League(39, "Premier League", country="England"),
            League(235, "Premier League", country="Russia"),
            League(900, "Premier League"),
            League(901, "Premier League"),
        ])
        assert options["Premier League"] == 39
        assert options["Premier League (Russia)"] == 235
        assert options["Premier League (2)"] == 900
        assert options["Premier League (3)"] == 901

    def test_empty(self):
        assert league_options([]) == {ALL_LEAGUES_LABEL: None}


class TestFixturesFrame:
    def test_columns_and_rows(self, make_fixture):
        df = utils.fixtures_frame([
            make_fixture(1, "Arsenal", "Everton", home_goals=2, away_goals=1),
            make_fixture(2, "Chelsea", "Fulham"),
        ])
        assert list(df.columns) == ["FixtureId", "HomeLogo", "Home", "AwayLogo", "Away",
                                    "Kickoff", "League", "Score"]
        assert df["Home"].tolist() == ["Arsenal", "Chelsea"]
        assert df["Score"].tolist() == ["2 - 1", ""]
        assert df["Kickoff"].tolist() == ["15:00", "15:00"]

    def test_empty_page(self):
        df = utils.fixtures_frame([])
        assert df.empty
        assert "Home" in df.columns

    def test_kickoff_in_fixture_timezone(self, make_fixture):
        f = make_fixture(1, "Arsenal", timezone="Europe/London")
        assert utils.format_kickoff(f) == "16:00"

    def test_invalid_kickoff(self, make_fixture):
        f = make_fixture(1, "Arsenal", kickoff="not a date")
        assert pd.isnull(f.kickoff_ts)
        assert utils.format_kickoff(f) == ""
