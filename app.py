import streamlit as st
import pandas as pd
import logging
from enum import Enum

from constants import ALLIANCES, ALLIANCE_COLORS, DEFENSE_SCALE, NOT_APPLICABLE, RANKINGS, data_dir
from charts.factory import ranking_lollipop, team_points_trend
from charts.formatters import format_metric_value, match_summary_lines
from scouting.aggregations.event_rankings import compute_event_rankings, event_overview, my_team_summary
from scouting.blob_store import FileBlobStore
from scouting.errors import ScoutingDataError
from scouting.identity import ScoutIdentity
from scouting.schema import build_observation
from scouting.store import MatchRecordStore
from scouting.team_stats import team_statistics

logger = logging.getLogger(__name__)

CLIMB_LEVELS = ["0", "1", "2", "3"]
SHOOTER_OPTIONS = ["Turret", "Fixed", "Catapult", "Other"]
CHASSIS_OPTIONS = ["Swerve", "Tank", "Mecanum", "Other"]
HOOD_OPTIONS = ["", "Yes", "No"]
POSITIONS = ["1", "2", "3"]


class View(str, Enum):
    SCOUT = "Scout"
    TEAMS = "Teams"
    ANALYTICS = "Analytics"


def build_store(root: str | None = None) -> MatchRecordStore:
    """One store per session, handed to every view."""
    blobs = FileBlobStore(root or data_dir())
    return MatchRecordStore(blobs, ScoutIdentity(blobs))


def _metric_rows(stats, metrics) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Metric": label, "Value": format_metric_value(stats.metric(metric), metric)} for label, metric in metrics]
    )


# --- LOGIN ---
def render_login(store: MatchRecordStore) -> None:
    identity = store.identity
    current = identity.get()
    with st.sidebar.expander("Scout Team", expanded=current is None):
        if current:
            st.caption(f"Logged in as Team {current}")
        with st.form("login-form"):
            team = st.text_input("Your team number", value=current or "")
            if st.form_submit_button("Save") and team.strip():
                identity.set(team)
                st.rerun()


# --- DATA MANAGEMENT ---
def render_data_tools(store: MatchRecordStore) -> None:
    st.sidebar.subheader("Data")
    st.sidebar.download_button(
        "📥 Export Data",
        store.export_json().encode("utf-8"),
        store.export_filename(),
        "application/json",
    )
    st.sidebar.download_button(
        "📥 Download CSV",
        store.to_frame().to_csv(index=False).encode("utf-8"),
        "frc_scouting_data.csv",
        "text/csv",
    )

    uploaded = st.sidebar.file_uploader("Import Data", type=["json"], key="import_uploader")
    if uploaded is not None and st.sidebar.button("Merge Import"):
        try:
            added = store.import_matches(uploaded.getvalue())
        except ScoutingDataError as e:
            logger.warning("Import of %s rejected: %s", uploaded.name, e)
            st.sidebar.error(str(e))
        else:
            st.sidebar.success(f"Imported {added} new matches")

    confirm = st.sidebar.checkbox("I understand this deletes ALL scouting data")
    if st.sidebar.button("Clear All Data", disabled=not confirm):
        store.clear_all()
        st.rerun()


# --- SCOUT VIEW ---
def render_scout_view(store: MatchRecordStore) -> None:
    st.header("Scout a Match")
    with st.form("scout-form", clear_on_submit=True):
        c1, c2, c3, c4 = st.columns(4)
        team_number = c1.text_input("Team Number")
        match_number = c2.text_input("Match Number")
        alliance = c3.selectbox("Alliance", ALLIANCES)
        position = c4.selectbox("Position", POSITIONS)

        st.subheader("Autonomous")
        a1, a2, a3 = st.columns(3)
        auto_fuel = a1.number_input("Fuel Scored", min_value=0, step=1, key="auto_fuel")
        auto_cycle = a2.number_input("Cycle Time (s)", min_value=0.0, step=0.1, key="auto_cycle")
        auto_climb = a3.selectbox("Tower Climb", CLIMB_LEVELS, key="auto_climb")

        st.subheader("Teleop")
        t1, t2, t3, t4 = st.columns(4)
        teleop_fuel = t1.number_input("Fuel Scored", min_value=0, step=1, key="teleop_fuel")
        teleop_cycle = t2.number_input("Cycle Time (s)", min_value=0.0, step=0.1, key="teleop_cycle")
        teleop_rate = t3.number_input("Fuel / Sec", min_value=0.0, step=0.1, key="teleop_rate")
        capacity = t4.number_input("Fuel Capacity", min_value=0, step=1)

        st.subheader("Robot & Endgame")
        r1, r2, r3, r4, r5 = st.columns(5)
        chassis = r1.selectbox("Chassis", CHASSIS_OPTIONS)
        shooter = r2.selectbox("Shooter", SHOOTER_OPTIONS)
        hood = r3.selectbox("Hood Adjustable", HOOD_OPTIONS)
        climb = r4.selectbox("Endgame Climb", CLIMB_LEVELS)
        defense = r5.slider("Defense", *DEFENSE_SCALE, DEFENSE_SCALE[0])
        notes = st.text_area("Notes")

        if st.form_submit_button("Save Match"):
            observation = build_observation(
                team_number=team_number,
                match_number=match_number,
                alliance=alliance,
                position=position,
                auto_fuel_scored=auto_fuel,
                auto_cycle_time=auto_cycle,
                auto_tower_climb=auto_climb,
                chassis_type=chassis,
                teleop_fuel_scored=teleop_fuel,
                teleop_cycle_time=teleop_cycle,
                teleop_fuel_rate=teleop_rate,
                fuel_capacity=capacity,
                shooter_mechanism=shooter,
                hood_adjustable=hood,
                climb=climb,
                defense=str(defense),
                notes=notes,
            )
            if observation["teamNumber"] is None:
                st.error("Team number is required")
            else:
                store.add_match(observation)
                st.success(f"Match data saved for Team {observation['teamNumber']}!")


# --- TEAMS VIEW ---
def render_match_history(records) -> None:
    for match in records:
        color = ALLIANCE_COLORS.get(str(match.get("alliance")), "#94a3b8")
        st.markdown(
            f"**Match {match.get('matchNumber')}** · Team {match.get('teamNumber')} · "
            f"<span style='color: {color}'>{match.get('alliance')} Alliance - Pos {match.get('position')}</span>",
            unsafe_allow_html=True,
        )
        st.caption("  \n".join(match_summary_lines(match)))
        if match.get("notes"):
            st.caption(f"📝 {match.get('notes')}")


def render_teams_view(store: MatchRecordStore) -> None:
    st.header("Teams")
    teams = store.team_numbers()
    if not teams:
        st.info("📊 No teams scouted yet. Start scouting matches to see team data here!")
        return

    cards = []
    for team in teams:
        stats = team_statistics(store, team).display()
        cards.append({
            "Team": team,
            "Matches": stats["matchCount"],
            "Avg Points": stats["avgPoints"],
            "Auto Fuel": stats["avgAutoFuel"],
            "Teleop Fuel": stats["avgTeleopFuel"],
            "Avg Climb": stats["avgEndgameClimb"],
            "Chassis": stats["primaryChassis"],
        })
    st.dataframe(pd.DataFrame(cards), hide_index=True, use_container_width=True)

    team = st.selectbox("Team detail", teams, format_func=lambda t: f"Team {t}")
    stats = team_statistics(store, team)
    matches = store.records_for_team(team)

    col_avg, col_summary = st.columns(2)
    with col_avg:
        st.subheader("Averages")
        st.table(_metric_rows(stats, [
            ("Auto Fuel", "avgAutoFuel"),
            ("Auto Cycle", "avgAutoCycleTime"),
            ("Teleop Fuel", "avgTeleopFuel"),
            ("Teleop Cycle", "avgTeleopCycleTime"),
            ("Fuel/Sec", "avgTeleopFuelRate"),
            ("Fuel Capacity", "avgFuelCapacity"),
            ("Auto Climb", "avgAutoClimb"),
            ("Endgame Climb", "avgEndgameClimb"),
        ]))
    with col_summary:
        st.subheader("Summary")
        st.metric("Total Matches", stats.match_count)
        st.metric("Avg Points", format_metric_value(stats.avg_points, "avgPoints"))
        st.metric("Primary Shooter", stats.primary_shooter)
        st.metric("Chassis Type", stats.primary_chassis)
        st.metric("Defense Rating", format_metric_value(stats.avg_defense, "avgDefense"))

    st.plotly_chart(team_points_trend(matches, team), use_container_width=True)
    st.subheader("Match History")
    render_match_history(matches)


# --- ANALYTICS VIEW ---
def render_event_stats(store: MatchRecordStore) -> None:
    team_index = store.team_index()
    if not team_index:
        st.info("📈 No data available. Scout some matches to see event statistics!")
        return

    rankings = compute_event_rankings(team_index)
    names = list(RANKINGS)
    for row_start in range(0, len(names), 2):
        cols = st.columns(2)
        for col, name in zip(cols, names[row_start:row_start + 2]):
            with col:
                st.plotly_chart(ranking_lollipop(rankings[name], name), use_container_width=True)

    overview = event_overview(store)
    o1, o2, o3 = st.columns(3)
    o1.metric("Total Teams Scouted", overview["totalTeams"])
    o2.metric("Total Matches", overview["totalMatches"])
    o3.metric("Avg Matches/Team", overview["avgMatchesPerTeam"])


def render_my_team(store: MatchRecordStore) -> None:
    team = store.identity.team_number()
    if team is None:
        st.info("🔒 Team not set. Log in with your team number in the sidebar to see custom analytics.")
        return

    summary = my_team_summary(store, team)
    st.subheader("Scouting Contributions")
    s1, s2 = st.columns(2)
    s1.metric("Total Matches Scouted", summary.total_matches_scouted)
    s2.metric(f"Scouted by Team {team}", summary.scouted_by_team)

    if summary.stats is None:
        st.info(f"❓ No performance data for Team {team}. We haven't scouted any matches for your team yet.")
    else:
        stats = summary.stats
        st.subheader(f"Your Team: {team} Performance")
        p1, p2, p3, p4, p5 = st.columns(5)
        p1.metric("Matches Played", stats.match_count)
        p2.metric("Avg Points", format_metric_value(stats.avg_points, "avgPoints"))
        p3.metric("Avg Teleop Fuel", format_metric_value(stats.avg_teleop_fuel, "avgTeleopFuel"))
        p4.metric("Endgame Climb", format_metric_value(stats.avg_endgame_climb, "avgEndgameClimb"))
        p5.metric("Chassis", stats.primary_chassis or NOT_APPLICABLE)

    with st.expander("Scouting History"):
        render_match_history(summary.history)


def render_analytics_view(store: MatchRecordStore) -> None:
    st.header("Analytics")
    tab_event, tab_mine = st.tabs(["Event Stats", "My Team"])
    with tab_event:
        render_event_stats(store)
    with tab_mine:
        render_my_team(store)


VIEW_RENDERERS = {
    View.SCOUT: render_scout_view,
    View.TEAMS: render_teams_view,
    View.ANALYTICS: render_analytics_view,
}


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(page_title="FRC Scouting", layout="wide", page_icon="🤖")
    st.title("🤖 FRC 2026 Scouting")

    # --- SESSION STATE INITIALIZATION ---
    if "store" not in st.session_state:
        st.session_state.store = build_store()
    st.session_state.setdefault("view", View.SCOUT)

    store = st.session_state.store
    render_login(store)
    view = st.sidebar.radio("View", list(View), format_func=lambda v: v.value, key="view")
    render_data_tools(store)
    VIEW_RENDERERS[View(view)](store)


if __name__ == "__main__":
    main()
