import html
from datetime import date, datetime, timezone

import streamlit as st
import pandas as pd
import plotly.express as px

from phantoms.config import REPO_OWNER, REPO_NAME, EVENTS_PER_PAGE
from phantoms.ingestion.events_feed import (
    event_status,
    paginate_events,
    registration_available,
    split_events,
    unique_event_ids,
)
from phantoms.pipeline import build_leaderboard, SOURCE_CACHED, SOURCE_UNAVAILABLE
from phantoms.scoring.achievements import ACHIEVEMENTS, ACHIEVEMENT_BY_ID
from phantoms.scoring.aggregator import leaderboard_dataframe
from phantoms.scoring.leagues import (
    build_roster,
    compare_contributors,
    get_league_info,
    summarize_leaderboard,
    top_contributors,
)

# --- Page Configuration ---
st.set_page_config(
    page_title="Pixel Phantoms Command Center",
    page_icon="👾",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# --- Design System ---
ACCENT_COLORS = {
    "primary": "#00f3ff",       # Cyan - default accent
    "titan": "#ff0055",         # Pink - heavy contributors
    "striker": "#ffd700",       # Gold - fast contributors
    "success": "#0aff60",
    "muted": "#5c7080",
}

TIER_COLORS = {
    "TITAN": ACCENT_COLORS["titan"],
    "STRIKER": ACCENT_COLORS["striker"],
}

STATUS_COLORS = {
    "OVERDRIVE": ACCENT_COLORS["titan"],
    "ONLINE": ACCENT_COLORS["success"],
    "IDLE": ACCENT_COLORS["muted"],
}

RANK_ICONS = {
    1: {"icon": "👑", "color": "#FFD700"},
    2: {"icon": "🥈", "color": "#C0C0C0"},
    3: {"icon": "🥉", "color": "#CD7F32"},
}

FALLBACK_AVATAR = "https://github.com/identicons/phantom.png"


def get_rank_badge_html(rank):
    """Generate HTML for a rank badge; podium ranks get an icon."""
    if rank not in RANK_ICONS:
        return f'<span style="font-weight:600;">#{rank:02d}</span>'
    info = RANK_ICONS[rank]
    return f'<span style="color:{info["color"]};font-size:1.2rem;">{info["icon"]}</span>'


def generate_leaderboard_cards(contributors):
    """HTML cards for the leaderboard view (top 50)."""
    if not contributors:
        return "<p>No active agents found. Be the first!</p>"

    card_style = "border:1px solid rgba(0,243,255,0.25);border-radius:12px;padding:0.75rem 1rem;margin-bottom:0.5rem;display:flex;align-items:center;gap:1rem;"
    sub_style = f"font-size:0.75rem;color:{ACCENT_COLORS['muted']};"

    cards = []
    for agent in contributors[:50]:
        tier_color = TIER_COLORS.get(agent.tier, ACCENT_COLORS["primary"])
        status_color = STATUS_COLORS.get(agent.status, ACCENT_COLORS["muted"])
        velocity_pct = min(agent.velocity_score, 100)
        avatar = html.escape(agent.avatar_url or FALLBACK_AVATAR)
        login = html.escape(agent.login)

        cards.append(f"""
        <div style="{card_style}">
            <div style="width:3rem;text-align:center;">{get_rank_badge_html(agent.rank)}</div>
            <img src="{avatar}" style="width:36px;height:36px;border-radius:50%;">
            <div style="flex:1;">
                <div style="font-weight:700;">{login}</div>
                <div style="{sub_style}">Events: {agent.event_count} | PRs: {agent.pull_request_count}</div>
            </div>
            <div style="color:{tier_color};font-weight:800;letter-spacing:1px;width:6rem;">{agent.tier}</div>
            <div style="width:8rem;" title="Velocity: {agent.velocity_score}">
                <div style="background:rgba(128,128,128,0.25);border-radius:4px;height:6px;">
                    <div style="background:{ACCENT_COLORS['primary']};width:{velocity_pct}%;height:6px;border-radius:4px;"></div>
                </div>
            </div>
            <div style="font-weight:700;width:6rem;text-align:right;">{agent.experience_points:,} XP</div>
            <div style="color:{status_color};font-size:0.75rem;font-weight:700;width:6rem;text-align:right;">{agent.status}</div>
        </div>""")
    return "".join(cards)


def apply_plotly_style(fig):
    """Transparent backgrounds and neutral grids so charts follow the Streamlit theme."""
    grid_color = "rgba(128, 128, 128, 0.4)"
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        xaxis=dict(gridcolor=grid_color, showgrid=False, zeroline=False),
        yaxis=dict(gridcolor=grid_color, showgrid=True, zeroline=False),
        showlegend=False,
        dragmode=False,  # Disable pan/zoom to prevent scroll hijacking on mobile
    )
    return fig


def xp_distribution_chart(contributors):
    """Bar chart of the top 20 XP totals."""
    df = leaderboard_dataframe(contributors[:20])
    fig = px.bar(
        df,
        x="login",
        y="experience_points",
        color="tier",
        color_discrete_map={**TIER_COLORS, "SCOUT": ACCENT_COLORS["primary"], "ROOKIE": ACCENT_COLORS["muted"]},
        labels={"login": "Agent", "experience_points": "XP"},
    )
    return apply_plotly_style(fig)


# --- Data Loading Functions ---
@st.cache_data(ttl=3600)
def load_leaderboard(owner, repo):
    """Run the pipeline once per hour; Streamlit caches the (pickled) result."""
    return build_leaderboard(owner, repo, now=datetime.now(timezone.utc))


# --- Views ---
def render_leaderboard_view(result):
    contributors = list(result.contributors)
    summary = summarize_leaderboard(contributors, result.events)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Performers", summary.total_contributors)
    col2.metric("Events", summary.total_events)
    col3.metric("Total Mass", summary.total_mass)
    col4.metric("Avg Velocity", summary.average_velocity)

    if not contributors:
        st.info("No active agents found. Be the first!")
        return

    search = st.text_input("Search agents", key="agent_search").strip().lower()
    shown = [c for c in contributors if search in c.login.lower()] if search else contributors
    st.html(f'<div class="ranking-cards">{generate_leaderboard_cards(shown)}</div>')

    st.subheader("XP Distribution (Top 20)")
    st.plotly_chart(xp_distribution_chart(contributors), use_container_width=True, config={'displayModeBar': False})

    st.subheader("Compare Agents")
    logins = [c.login for c in contributors]
    if len(logins) >= 2:
        left, right = st.columns(2)
        first_login = left.selectbox("Agent", logins, index=0, key="compare_first")
        second_login = right.selectbox("Opponent", logins, index=1, key="compare_second")
        by_login = {c.login: c for c in contributors}
        comparison = compare_contributors(by_login[first_login], by_login[second_login])
        c1, c2, c3 = st.columns(3)
        c1.metric("Winner", comparison.winner or "Tie")
        c2.metric("XP Difference", f"{comparison.xp_difference:,}")
        c3.metric("PR Difference", comparison.pr_difference)

        profile = by_login[first_login]
        badges = [ACHIEVEMENT_BY_ID[a].name for a in profile.achievements if a in ACHIEVEMENT_BY_ID]
        st.caption(f"{first_login} achievements: {', '.join(badges) if badges else 'No achievements yet. Keep contributing!'}")


def render_roster_view(result):
    contributors = list(result.contributors)
    roster = build_roster(contributors)
    by_login = {c.login: c for c in contributors}

    st.subheader("Top Agents")
    for agent in top_contributors(contributors):
        league = get_league_info(agent.experience_points)
        st.markdown(
            f'**#{agent.rank} @{html.escape(agent.login)}** '
            f'<span style="color:{league.color}">{league.name}</span> · {agent.experience_points:,} XP',
            unsafe_allow_html=True,
        )

    gold, silver, bronze = st.columns(3)
    for column, tier, label in ((gold, "gold", "🥇 Gold"), (silver, "silver", "🥈 Silver"), (bronze, "bronze", "🥉 Bronze")):
        with column:
            st.markdown(f"### {label}")
            if not roster[tier]:
                st.caption("No agents in this tier.")
            for login in roster[tier]:
                st.markdown(f"**{html.escape(login)}** · {by_login[login].experience_points:,} XP")


def render_achievements_view():
    rows = [
        {"Achievement": a.name, "Description": a.description, "XP": f"+{a.xp}"}
        for a in ACHIEVEMENTS
    ]
    st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)


def render_event_card(event, today: date, widget_id: str):
    status = event_status(event, today)
    with st.container(border=True):
        st.markdown(f"**{event.title}** · `{status.upper()}`")
        st.caption(f"📅 {event.date.strftime('%a, %d %b %Y')} · 📍 {event.location}")
        st.write(event.description)
        if registration_available(event, today):
            st.link_button("Register Now", event.registration_link)
        else:
            st.button("Registration Closed", disabled=True, key=f"closed_{widget_id}")


def render_events_view(result):
    today = date.today()
    upcoming, past = split_events(result.events, today)

    st.subheader("Upcoming")
    if not upcoming:
        st.caption(">> No upcoming signals detected.")
    for event, widget_id in zip(upcoming, unique_event_ids(upcoming)):
        render_event_card(event, today, widget_id)

    st.subheader("Archive")
    if not past:
        st.caption(">> Archive logs are empty.")
        return
    _, total_pages = paginate_events(past, 1, EVENTS_PER_PAGE)
    page = st.number_input("Page", min_value=1, max_value=total_pages, value=1, step=1, key="events_page")
    page_events, _ = paginate_events(past, int(page), EVENTS_PER_PAGE)
    for event, widget_id in zip(page_events, unique_event_ids(page_events)):
        render_event_card(event, today, widget_id)
    st.caption(f"Page {int(page)} of {total_pages}")


# --- Main App ---
def main():
    st.title("Pixel Phantoms // Command Center")

    result = load_leaderboard(REPO_OWNER, REPO_NAME)

    # --- Sidebar ---
    with st.sidebar:
        st.header("📡 Data Stream")
        st.caption(f"Repository: {REPO_OWNER}/{REPO_NAME}")
        st.caption(f"Source: {result.source}")
        if st.button("Refresh"):
            load_leaderboard.clear()
            st.rerun()

    if result.source == SOURCE_CACHED:
        st.warning("Showing cached data - Last updated data unavailable")
    elif result.source == SOURCE_UNAVAILABLE:
        st.error(result.error or "Data unavailable")

    TAB_OPTIONS = ["🏆 Leaderboard", "👥 Roster", "🎖️ Achievements", "📅 Events"]
    active_tab = st.radio(
        "Navigation",
        TAB_OPTIONS,
        horizontal=True,
        label_visibility="collapsed",
        key="tab_selector"
    )

    if active_tab == "🏆 Leaderboard":
        render_leaderboard_view(result)
    elif active_tab == "👥 Roster":
        render_roster_view(result)
    elif active_tab == "🎖️ Achievements":
        render_achievements_view()
    else:
        render_events_view(result)


if __name__ == "__main__":
    main()
