"""
Small data model for fixtures and leagues.

These lightweight dataclasses document the fields the app reads from the
football API. They are frozen (immutable): a refetch replaces the whole
collection instead of patching records in place.

`Fixture` flattens the nested API record (`fixture`, `teams`, `league`,
`score`) into one row; `League` keeps the handful of fields the dropdown and
the suggestion list need.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import pandas as pd


@dataclass(frozen=True)
class Team:
        team_id: int
        name: str
        logo: str = ""


@dataclass(frozen=True)
class Fixture:
        fixture_id: int
        kickoff: str
        home: Team
        away: Team
        league_id: int
        league_name: str
        timezone: str = "UTC"
        status_short: str = ""
        status_long: str = ""
        venue_name: Optional[str] = None
        venue_city: Optional[str] = None
        referee: Optional[str] = None
        league_logo: str = ""
        league_country: str = ""
        home_goals: Optional[int] = None
        away_goals: Optional[int] = None

        @property
        def label(self) -> str:
            return f"{self.home.name} vs {self.away.name}"

        @property
        def is_finished(self) -> bool:
            return self.home_goals is not None and self.away_goals is not None

        @property
        def kickoff_ts(self) -> pd.Timestamp:
            # Invalid/empty strings become NaT
            return pd.to_datetime(self.kickoff, errors="coerce", utc=True)


@dataclass(frozen=True)
class League:
        league_id: int
        name: str
        league_type: str = ""
        logo: str = ""
        country: str = ""

        @property
        def label(self) -> str:
            return self.name
