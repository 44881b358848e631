"""
Streamlit Frontend for the LeetCode Progress Tracker

This is the page the user works with every day.

DESIGN PRINCIPLES:
1. Everything on screen is read back from storage after each change
2. Deleting always asks for confirmation first
3. Advisory checks are shown, never enforced

Pages:
- Add Problem: log a solved problem
- Problems: filterable cards with view/delete actions
- Progress: stat tiles and the cumulative chart
- Settings: where the data lives, recent activity
"""

from datetime import date

import plotly.graph_objects as go
import streamlit as st

from src.config import get_settings, validate_all_settings
from src.models.problem import DIFFICULTY_FILTER_ALL, Difficulty, ProblemEntry, Problem
from src.queries import (
    EMPTY_STATE_MESSAGE,
    collect_tags,
    describe_filter,
    format_display_date,
)
from src.services.storage import StorageError
from src.tracker import ProblemTracker, create_app_components


# Page configuration
st.set_page_config(
    page_title="LeetCode Progress Tracker",
    page_icon="🧩",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .difficulty-badge {
        padding: 2px 10px;
        border-radius: 12px;
        font-size: 0.85em;
        font-weight: 600;
        color: white;
    }
    .difficulty-easy { background-color: #00b8a3; }
    .difficulty-medium { background-color: #ffc01e; }
    .difficulty-hard { background-color: #ff375f; }
    .problem-tag {
        display: inline-block;
        padding: 1px 8px;
        margin: 2px 4px 2px 0;
        border-radius: 8px;
        background-color: #ecf0f1;
        font-size: 0.8em;
    }
</style>
""", unsafe_allow_html=True)


FILTER_OPTIONS = [DIFFICULTY_FILTER_ALL] + [d.value for d in Difficulty]


@st.cache_resource
def get_tracker() -> ProblemTracker:
    """Get or create the tracker (cached for the session's lifetime)."""
    try:
        tracker = create_app_components(use_file_storage=True)
        tracker.initialize()
    except StorageError as e:
        st.error(f"Could not open your saved problems: {e}")
        tracker = create_app_components(use_file_storage=False)
        tracker.initialize()
    return tracker


def main():
    """Main application entry point."""
    tracker = get_tracker()

    st.sidebar.title("🧩 Progress Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["➕ Add Problem", "📚 Problems", "📈 Progress", "⚙️ Settings"],
        index=1,
    )

    st.sidebar.markdown("---")
    try:
        stats = tracker.get_statistics()
        st.sidebar.markdown(f"**Solved so far:** {stats.total}")
    except StorageError as e:
        st.sidebar.error(str(e))

    if page == "➕ Add Problem":
        render_add_page(tracker)
    elif page == "📚 Problems":
        render_problems_page(tracker)
    elif page == "📈 Progress":
        render_progress_page(tracker)
    elif page == "⚙️ Settings":
        render_settings_page(tracker)


def render_add_page(tracker: ProblemTracker):
    """Render the add-problem form."""
    st.title("➕ Add Problem")

    with st.form("problem_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            title = st.text_input("Problem Title *")
            link = st.text_input(
                "Problem Link",
                placeholder="https://leetcode.com/problems/...",
            )
            solved_on = st.date_input("Date Solved", value=date.today())
        with col2:
            difficulty = st.selectbox(
                "Difficulty",
                options=list(Difficulty),
                format_func=lambda d: d.label,
            )
            time_complexity = st.text_input("Time Complexity", placeholder="O(n)")
            space_complexity = st.text_input("Space Complexity", placeholder="O(1)")

        solution = st.text_area(
            "Solution Approach",
            placeholder="How did you solve it?",
        )
        tags = st.text_input(
            "Tags",
            placeholder="Array, Hash Table",
            help="Comma-separated",
        )

        submitted = st.form_submit_button("Add Problem", type="primary")

    if not submitted:
        return

    if not title.strip():
        st.error("Please enter the problem title")
        return

    entry = ProblemEntry(
        title=title,
        link=link,
        solved_on=solved_on,
        difficulty=difficulty,
        solution=solution,
        time_complexity=time_complexity,
        space_complexity=space_complexity,
        tags=tags,
    )

    try:
        check = tracker.check_entry(entry)
        tracker.add_problem(entry)
    except StorageError as e:
        st.error(f"Failed to save: {e}")
        return

    st.success("Problem added successfully!")
    if check.has_warnings:
        st.warning(tracker.validator.summary(check))


def render_problem_card(tracker: ProblemTracker, problem: Problem):
    """Render one problem card."""
    with st.container(border=True):
        header, badge = st.columns([5, 1])
        with header:
            st.markdown(f"### {problem.title}")
        with badge:
            st.markdown(
                f'<span class="difficulty-badge difficulty-{problem.difficulty.value}">'
                f"{problem.difficulty.label}</span>",
                unsafe_allow_html=True,
            )

        st.markdown(
            f"📅 {format_display_date(problem.solved_on)} &nbsp;&nbsp; "
            f"⏱️ {problem.time_complexity or '-'} &nbsp;&nbsp; "
            f"💾 {problem.space_complexity or '-'}"
        )

        if problem.tags:
            st.markdown(
                "".join(f'<span class="problem-tag">{tag}</span>' for tag in problem.tags),
                unsafe_allow_html=True,
            )

        st.markdown(f"**Solution Approach:** {problem.solution}")

        view_col, delete_col, _ = st.columns([2, 2, 4])
        with view_col:
            try:
                link = tracker.problem_link(problem.id)
            except StorageError:
                link = ""
            if link:
                st.link_button("🔗 View on LeetCode", link)
        with delete_col:
            if st.button("🗑️ Delete", key=f"delete_{problem.id}"):
                st.session_state.pending_delete = problem.id
                st.rerun()

        if st.session_state.get("pending_delete") == problem.id:
            st.warning("Are you sure you want to delete this problem?")
            yes_col, no_col, _ = st.columns([2, 2, 4])
            with yes_col:
                if st.button("Yes, delete", key=f"confirm_{problem.id}", type="primary"):
                    _finish_delete(tracker, problem.id, confirmed=True)
            with no_col:
                if st.button("Cancel", key=f"cancel_{problem.id}"):
                    _finish_delete(tracker, problem.id, confirmed=False)


def _finish_delete(tracker: ProblemTracker, problem_id: str, confirmed: bool):
    st.session_state.pending_delete = None
    try:
        tracker.delete_problem(problem_id, confirmed=confirmed)
    except StorageError as e:
        st.error(f"Failed to delete: {e}")
        return
    st.rerun()


def render_problems_page(tracker: ProblemTracker):
    """Render the filterable card list."""
    st.title("📚 My Problems")

    col1, col2 = st.columns([3, 2])
    with col1:
        difficulty_filter = st.radio(
            "Difficulty",
            options=FILTER_OPTIONS,
            format_func=lambda x: "All" if x == DIFFICULTY_FILTER_ALL else Difficulty(x).label,
            horizontal=True,
        )

    try:
        all_problems = tracker.list_problems()
        with col2:
            tag_options = [None] + collect_tags(all_problems)
            tag = st.selectbox(
                "Tag",
                options=tag_options,
                format_func=lambda x: "Any tag" if x is None else x,
            )
        problems = tracker.list_problems(difficulty_filter, tag=tag)
    except StorageError as e:
        st.error(f"Could not load problems: {e}")
        return

    st.markdown("---")
    if not problems:
        st.info(EMPTY_STATE_MESSAGE)
        return

    st.caption(describe_filter(difficulty_filter, len(problems), tag=tag))
    for problem in problems:
        render_problem_card(tracker, problem)


def render_progress_page(tracker: ProblemTracker):
    """Render stat tiles and the cumulative progress chart."""
    st.title("📈 Progress")

    try:
        stats = tracker.get_statistics()
        series = tracker.get_progress_series()
    except StorageError as e:
        st.error(f"Could not load problems: {e}")
        return

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Solved", stats.total)
    col2.metric("Easy", stats.easy)
    col3.metric("Medium", stats.medium)
    col4.metric("Hard", stats.hard)

    st.markdown("---")

    if series.is_empty:
        st.info(EMPTY_STATE_MESSAGE)
        return

    line_color = get_settings().app.chart_line_color
    fig = go.Figure(
        go.Scatter(
            x=series.labels,
            y=series.counts,
            name="Problems Solved",
            mode="lines+markers",
            fill="tozeroy",
            line=dict(color=line_color, width=2, shape="spline"),
        )
    )
    fig.update_layout(
        template="plotly_white",
        margin=dict(l=10, r=10, t=30, b=10),
        height=380,
        showlegend=True,
    )
    fig.update_yaxes(rangemode="tozero", dtick=1, title="Problems Solved")
    st.plotly_chart(fig, use_container_width=True)


def render_settings_page(tracker: ProblemTracker):
    """Render configuration status and recent activity."""
    st.title("⚙️ Settings")

    st.markdown("### Storage")
    status = validate_all_settings()
    for name, key in [("Data directory", "storage"), ("Application", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'Not configured')}")

    st.markdown(f"**Problems are stored in:** `{tracker.storage.location}`")

    st.markdown("---")
    st.markdown("### Recent Activity")
    try:
        events = tracker.activity.recent_events(limit=20)
    except StorageError as e:
        st.error(str(e))
        return
    if not events:
        st.caption("No activity recorded yet.")
    for event in events:
        st.markdown(
            f"- `{event.timestamp:%Y-%m-%d %H:%M}` {event.description}"
        )

    st.markdown("---")
    st.markdown(
        "Configure the data location with `TRACKER_STORAGE_DATA_DIR` "
        "in your environment or a `.env` file."
    )


if __name__ == "__main__":
    main()
