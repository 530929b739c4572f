"""
View model behind the fixtures page.

`FixtureBrowser` owns everything the page shows: the canonical fixture and
league collections, the active filters (league, date, search text), the
filtered collection, the current page, the suggestion list and the fixture
opened in the detail dialog. The page only forwards user intents to it and
renders its derived state, so the whole flow can be tested without Streamlit.

Collaborators are injected:
    - `source`: anything implementing `controllers.data_controller.FixtureSource`.
    - `matcher`: a `common.search.FuzzyMatcher` (or compatible `search(pool, query, limit)`).

Notes on loading:
    - Leagues load once. Fixtures reload whenever the date or league changes.
      A fresh load replaces both the canonical and the filtered collection,
      which drops any active search.
    - A failed fetch keeps the last good collections and is reported through
      the returned `Result`, `fixtures_status` and `last_error`.
    - Each fixture fetch carries an epoch. With `discard_stale=True` a response
      that arrives after a newer fetch was issued is dropped instead of
      overwriting the newer data.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional, Union

from loguru import logger

from common.constants import MATCHES_PER_PAGE, SUGGESTION_LIMIT
from common.result import FetchError, Result
from common.search import FuzzyMatcher
from common.utils import ApiError
from controllers.data_controller import FixtureSource
from models.match_model import Fixture, League

Suggestion = Union[Fixture, League]


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class FixtureRequest:
    """Filter snapshot taken when a fixture fetch is issued."""

    epoch: int
    day: date
    league_id: Optional[int]


def _to_league_id(value: Union[int, str, None]) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _as_failure(exc: ApiError) -> Result:
    return Result.failure(FetchError(exc.error_type, str(exc), exc.details))


class FixtureBrowser:
    def __init__(
        self,
        source: FixtureSource,
        matcher: Optional[FuzzyMatcher] = None,
        today: Optional[date] = None,
        page_size: int = MATCHES_PER_PAGE,
        suggestion_limit: int = SUGGESTION_LIMIT,
        discard_stale: bool = True,
    ):
        self.source = source
        self.matcher = matcher or FuzzyMatcher()
        self.page_size = page_size
        self.suggestion_limit = suggestion_limit
        self.discard_stale = discard_stale

        # Canonical collections
        self.leagues: List[League] = []
        self.fixtures: List[Fixture] = []

        # Filter state
        self.league_id: Optional[int] = None
        self.selected_date: date = today or date.today()
        self.query: str = ""

        # Derived / UI state
        self.filtered: List[Fixture] = []
        self.suggestions: List[Suggestion] = []
        self.page: int = 1
        self.selected: Optional[Fixture] = None

        self.leagues_status = LoadStatus.IDLE
        self.fixtures_status = LoadStatus.IDLE
        self.last_error: Optional[FetchError] = None
        self._epoch = 0

    # ---------- Loading ----------
    def load_leagues(self) -> Result:
        if self.leagues_status == LoadStatus.LOADED:
            return Result.success(self.leagues)

        self.leagues_status = LoadStatus.LOADING
        try:
            leagues = self.source.get_leagues()
        except ApiError as exc:
            logger.warning(f"Error fetching leagues: {exc}")
            self.leagues_status = LoadStatus.FAILED
            result = _as_failure(exc)
            self.last_error = result.error
            return result

        self.leagues = list(leagues)
        self.leagues_status = LoadStatus.LOADED
        logger.info(f"Loaded {len(self.leagues)} leagues")
        return Result.success(self.leagues)

    def begin_fixture_load(self) -> FixtureRequest:
        self._epoch += 1
        self.fixtures_status = LoadStatus.LOADING
        return FixtureRequest(epoch=self._epoch, day=self.selected_date, league_id=self.league_id)

    def fetch(self, request: FixtureRequest) -> Result:
        """Run the remote call for `request`. Touches no view-model state."""
        logger.debug(f"Fetching fixtures for {request.day} (epoch {request.epoch})")
        try:
            return Result.success(list(self.source.get_fixtures(request.day)))
        except ApiError as exc:
            return _as_failure(exc)

    def finish_fixture_load(self, request: FixtureRequest, result: Result) -> Result:
        if self.discard_stale and request.epoch != self._epoch:
            logger.info(
                f"Discarding fixtures for {request.day}: epoch {request.epoch} superseded by {self._epoch}"
            )
            return result

        if result.is_failure:
            logger.warning(f"Error fetching fixtures for {request.day}: {result.error.message}")
            self.fixtures_status = LoadStatus.FAILED
            self.last_error = result.error
            return result

        fixtures = result.value
        if request.league_id is not None:
            fixtures = [f for f in fixtures if f.league_id == request.league_id]

        self.fixtures = fixtures
        self.filtered = list(fixtures)
        self.fixtures_status = LoadStatus.LOADED
        self.last_error = None
        logger.info(f"Loaded {len(fixtures)} fixtures for {request.day} (league={request.league_id})")
        return Result.success(fixtures)

    def load_fixtures(self) -> Result:
        request = self.begin_fixture_load()
        return self.finish_fixture_load(request, self.fetch(request))

    def reload(self) -> Result:
        return self.load_fixtures()

    # ---------- Filters ----------
    def set_league(self, league_id: Union[int, str, None]) -> bool:
        league_id = _to_league_id(league_id)
        if league_id == self.league_id:
            return False
        self.league_id = league_id
        self.load_fixtures()
        return True

    def set_date(self, day: date) -> bool:
        if day == self.selected_date:
            return False
        self.selected_date = day
        self.load_fixtures()
        return True

    # ---------- Search ----------
    def set_query(self, text: str) -> None:
        self.query = text or ""
        if not self.query:
            self.suggestions = []
            return
        pool: List[Suggestion] = [*self.fixtures, *self.leagues]
        self.suggestions = self.matcher.search(pool, self.query, self.suggestion_limit)

    def search(self) -> List[Fixture]:
        # Searches the fixtures of the current load only; not composed with a
        # league picked after that load.
        if not self.query:
            self.filtered = list(self.fixtures)
        else:
            self.filtered = self.matcher.search(self.fixtures, self.query)
        logger.debug(f"Search {self.query!r} -> {len(self.filtered)} fixtures")
        return self.filtered

    def pick_suggestion(self, item: Suggestion) -> List[Fixture]:
        self.query = item.label
        self.suggestions = []
        return self.search()

    # ---------- Pagination ----------
    def change_page(self, page: int) -> None:
        self.page = page

    def next_page(self) -> None:
        self.change_page(self.page + 1)

    def previous_page(self) -> None:
        self.change_page(self.page - 1)

    @property
    def page_count(self) -> int:
        return math.ceil(len(self.filtered) / self.page_size)

    @property
    def visible_page(self) -> List[Fixture]:
        if self.page < 1:
            return []
        start = (self.page - 1) * self.page_size
        return self.filtered[start:start + self.page_size]

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page * self.page_size < len(self.filtered)

    # ---------- Detail ----------
    def select(self, fixture: Fixture) -> None:
        self.selected = fixture

    def dismiss(self) -> None:
        self.selected = None
