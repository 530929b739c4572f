"""
Main application entry for the Football Matches Streamlit app.

This module defines the single page users see when they open the app
(`streamlit run main.py`). It handles:
    - application configuration (`st.set_page_config`),
    - environment variable loading via `python-dotenv` and loguru setup,
    - creating one `FixtureBrowser` per browser session and keeping it in
        `st.session_state`,
    - forwarding widget changes (league, date, search text, suggestion and
        page clicks, row selection) to the browser and rendering its state.

All fetching, filtering, search and pagination logic lives in
`controllers.browser_controller`; this file only composes widgets around it.

Notes:
    - Streamlit reruns this script on every interaction. The browser object
        survives reruns in session state, so leagues are fetched once and
        fixtures only when the date or league actually changes.
    - Widget callbacks (`on_click`, `on_change`) mutate the browser before the
        rerun, so the page always renders the post-intent state.
"""

# Import libraries
import streamlit as st
from dotenv import load_dotenv
from loguru import logger

from common.constants import ALL_LEAGUES_LABEL
from common.logging_setup import configure_logging
from common.ui import picked_fixture, render_pagination, render_suggestions, show_fixture_detail
from common.utils import fixtures_frame, league_options
from controllers.browser_controller import FixtureBrowser, LoadStatus
from controllers.data_controller import ApiFootballSource

# Configure Streamlit page and load environment variables from `.env`.
st.set_page_config(page_title="Football Matches", layout="wide")
load_dotenv(override=False)
configure_logging()

QUERY_KEY = "search_query"


def _get_browser() -> FixtureBrowser:
    if "browser" not in st.session_state:
        logger.info("Starting new fixture browser session")
        st.session_state["browser"] = FixtureBrowser(ApiFootballSource())
    return st.session_state["browser"]


def _submit_search(browser: FixtureBrowser) -> None:
    # Enter in the text box submits the search as well as the button
    browser.set_query(st.session_state.get(QUERY_KEY, ""))
    browser.search()
    browser.change_page(1)


def main():
    browser = _get_browser()

    # 1) Leagues load once per session; fixtures for today on first run
    if browser.leagues_status == LoadStatus.IDLE:
        with st.spinner("Loading leagues..."):
            browser.load_leagues()
    if browser.fixtures_status == LoadStatus.IDLE:
        with st.spinner("Loading matches..."):
            browser.load_fixtures()

    st.title("⚽ Football Matches")

    # 2) Search box, suggestion list and search button
    search_col, button_col = st.columns([5, 1], vertical_alignment="bottom")
    search_col.text_input(
        "Search by team or league:",
        key=QUERY_KEY,
        placeholder="Enter team or league name",
        on_change=_submit_search,
        args=(browser,),
    )
    button_col.button("Search", on_click=_submit_search, args=(browser,), use_container_width=True)
    render_suggestions(browser, QUERY_KEY)

    # 3) League and date filters (each change triggers a refetch)
    options = league_options(browser.leagues)
    labels = list(options.keys())
    ids = list(options.values())
    league_col, date_col = st.columns(2)
    selected_label = league_col.selectbox(
        "Filter by League:",
        labels,
        index=ids.index(browser.league_id) if browser.league_id in ids else 0,
        key="league_filter",
    )
    selected_day = date_col.date_input("Select Date:", value=browser.selected_date, key="date_picker")

    with st.spinner("Loading matches..."):
        changed = browser.set_league(options.get(selected_label or ALL_LEAGUES_LABEL))
        changed = browser.set_date(selected_day) or changed
    if changed:
        browser.change_page(1)

    if browser.leagues_status == LoadStatus.FAILED:
        st.caption("League list unavailable; showing all leagues.")
    if browser.fixtures_status == LoadStatus.FAILED:
        st.warning("Could not refresh matches. Showing the last loaded results.")
        if st.button("Retry", key="retry_fixtures"):
            browser.reload()
            st.rerun()

    # 4) Current page of matches; selecting a row opens the detail dialog
    page_fixtures = browser.visible_page
    if not page_fixtures:
        st.info("No matches found for the selected date or league.")
        browser.dismiss()
    else:
        df = fixtures_frame(page_fixtures)
        event = st.dataframe(
            df.drop(columns=["FixtureId"]),
            use_container_width=True,
            hide_index=True,
            on_select="rerun",
            selection_mode="single-row",
            key=f"fixtures_table_{browser.page}",
            column_config={
                "HomeLogo": st.column_config.ImageColumn(" ", width="small"),
                "AwayLogo": st.column_config.ImageColumn(" ", width="small"),
            },
        )
        picked = picked_fixture(page_fixtures, event.selection.rows)
        if picked is not None and picked != st.session_state.get("last_picked"):
            browser.select(picked)
            show_fixture_detail(browser)
        elif browser.selected is not None:
            # A full rerun closes the dialog, including dismissal with its X
            browser.dismiss()
        st.session_state["last_picked"] = picked

    # 5) Pagination strip
    if browser.page_count:
        st.caption(f"Page {browser.page} of {browser.page_count} · {len(browser.filtered)} matches")
        render_pagination(browser)


if __name__ == "__main__":
    main()
