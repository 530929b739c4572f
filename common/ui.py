# common/ui.py
from __future__ import annotations
from typing import List, Optional, Sequence

import streamlit as st

from common.utils import format_kickoff
from controllers.browser_controller import FixtureBrowser
from models.match_model import Fixture

PAGE_WINDOW = 9   # numbered page buttons shown at once


def fixture_detail_lines(fixture: Fixture) -> List[str]:
    """Markdown lines for the detail dialog (everything below the logos)."""
    lines = [
        f"**Date:** {format_kickoff(fixture, '%Y-%m-%d %H:%M')} ({fixture.timezone})",
        f"**League:** {fixture.league_name}",
        f"**Venue:** {fixture.venue_name or 'N/A'}, {fixture.venue_city or 'N/A'}",
        f"**Referee:** {fixture.referee or 'N/A'}",
    ]
    if fixture.is_finished:
        lines.append(
            f"**Score:** {fixture.home.name} {fixture.home_goals} - {fixture.away_goals} {fixture.away.name}"
        )
    else:
        lines.append("**Status:** Upcoming match")
    return lines


def picked_fixture(page_fixtures: List[Fixture], rows: Sequence[int]) -> Optional[Fixture]:
    """Fixture for the first selected table row, ignoring rows left over from a longer page."""
    if rows and 0 <= rows[0] < len(page_fixtures):
        return page_fixtures[rows[0]]
    return None


def page_window(current: int, count: int, width: int = PAGE_WINDOW) -> List[int]:
    """Page numbers to show as buttons, centred on `current` where possible."""
    if count <= 0:
        return []
    if count <= width:
        return list(range(1, count + 1))
    start = max(1, min(current - width // 2, count - width + 1))
    return list(range(start, start + width))


@st.dialog("Match details", width="large")
def show_fixture_detail(browser: FixtureBrowser):
    fixture = browser.selected
    if fixture is None:
        return
    st.subheader(fixture.label)

    home, vs, away = st.columns([2, 1, 2])
    if fixture.home.logo:
        home.image(fixture.home.logo, caption=fixture.home.name, width=80)
    vs.markdown("### vs")
    if fixture.away.logo:
        away.image(fixture.away.logo, caption=fixture.away.name, width=80)

    for line in fixture_detail_lines(fixture):
        st.markdown(line)

    if st.button("Close", key="close_detail"):
        browser.dismiss()
        st.rerun()


def render_suggestions(browser: FixtureBrowser, query_key: str) -> None:
    """Clickable suggestion list under the search box."""
    if not browser.suggestions:
        return

    def _pick(item):
        browser.pick_suggestion(item)
        st.session_state[query_key] = browser.query   # keep the text box in sync
        browser.change_page(1)

    with st.container(border=True):
        for i, item in enumerate(browser.suggestions):
            st.button(item.label, key=f"suggestion_{i}", on_click=_pick, args=(item,),
                      use_container_width=True)


def render_pagination(browser: FixtureBrowser) -> None:
    pages = page_window(browser.page, browser.page_count)
    cols = st.columns(len(pages) + 2)
    cols[0].button("Previous", key="page_prev", disabled=not browser.has_previous,
                   on_click=browser.previous_page)
    for col, n in zip(cols[1:-1], pages):
        col.button(str(n), key=f"page_{n}", disabled=n == browser.page,
                   on_click=browser.change_page, args=(n,))
    cols[-1].button("Next", key="page_next", disabled=not browser.has_next,
                    on_click=browser.next_page)
