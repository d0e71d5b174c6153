"""
Page Replacement Algorithm Visualizer — FIFO, LRU & Optimal

This application provides an interactive simulation and visualization of how
an operating system chooses which page to evict when physical memory is full:
    - Paging, frames and page faults
    - FIFO, LRU and Optimal (Belady) page replacement
    - Step-by-step playback of the frame pool over a reference string
    - Side-by-side policy comparison and Belady's anomaly

Built with Streamlit for the web interface and Plotly for visualizations.
Run with: streamlit run app.py
"""

# =============================================================================
# IMPORTS
# =============================================================================

import time                                  # For pacing the playback
import streamlit as st                       # Web application framework
import plotly.graph_objects as go            # Interactive plotting library

from engine import (InvalidConfiguration, ReplacementPolicy, SimulationResult,
                    compare_policies, fault_curve, simulate)
from playback import MAX_SPEED, MIN_SPEED, Playback
from utils import (ReferenceParseError, cell_label, format_ratio,
                   format_reference_string, get_color, parse_reference_string,
                   random_reference_string, ratio)


# =============================================================================
# CONFIGURATION
# =============================================================================

DEFAULT_REFERENCE_STRING = "7 0 1 2 0 3 0 4 2 3 0 3 2 1 2"
BELADY_REFERENCE_STRING = "1 2 3 4 1 2 5 1 2 3 4 5"
DEFAULT_FRAME_COUNT = 3
MAX_FRAME_COUNT = 10

POLICY_LABELS = {
    ReplacementPolicy.FIFO: "First-In-First-Out (FIFO)",
    ReplacementPolicy.LRU: "Least Recently Used (LRU)",
    ReplacementPolicy.OPTIMAL: "Optimal Page Replacement",
}

POLICY_DESCRIPTIONS = {
    ReplacementPolicy.FIFO: "First-In-First-Out (FIFO) replaces the oldest page in memory",
    ReplacementPolicy.LRU: "Least Recently Used (LRU) replaces the page that hasn't been "
                           "used for the longest time",
    ReplacementPolicy.OPTIMAL: "Optimal replaces the page that won't be used for the "
                               "longest time in the future",
}


# =============================================================================
# RENDERING HELPERS
# =============================================================================

def timeline_figure(result: SimulationResult, upto: int) -> go.Figure:
    """Access timeline: one column per processed reference, one row per frame."""
    shown = result.steps[1:upto + 1]

    header = ["Frame"] + [
        f"{s.page}<br>{'Fault' if s.is_fault else 'Hit'}" for s in shown
    ]
    values = [[f"Frame {i + 1}" for i in range(result.frame_capacity)]]
    colors = [["#f9fafb"] * result.frame_capacity]
    for s in shown:
        values.append([cell_label(p) for p in s.frames])
        colors.append([get_color(s, i) for i in range(result.frame_capacity)])

    fig = go.Figure(go.Table(
        header=dict(values=header, fill_color="#f3f4f6", align="center"),
        cells=dict(values=values, fill_color=colors, align="center", height=32),
    ))
    fig.update_layout(height=120 + 34 * result.frame_capacity,
                      margin=dict(l=0, r=0, t=10, b=0))
    return fig


def frames_figure(result: SimulationResult, step_no: int) -> go.Figure:
    """Bar per frame showing which page it holds at the given step."""
    step = result.steps[step_no]

    x = []      # Frame indices
    y = []      # Bar heights (all 1 for uniform display)
    text = []   # Labels for each frame
    colors = [] # green=hit, red=just loaded, gray=free, blue=resident

    for i, p in enumerate(step.frames):
        text.append(f"F{i}: " + (f"P{p}" if p is not None else "Free"))
        if i == step.hit_frame:
            colors.append("lightgreen")
        elif i == step.evicted_frame:
            colors.append("salmon")
        else:
            colors.append("lightgray" if p is None else "lightblue")
        x.append(i)
        y.append(1)

    fig = go.Figure(go.Bar(x=x, y=y, text=text, marker_color=colors,
                           hovertext=text, hoverinfo="text"))
    fig.update_layout(height=150, showlegend=False,
                      yaxis=dict(showticklabels=False))
    return fig


def read_reference_string(text: str):
    """Parse sidebar text, reporting errors in the UI. Returns None on error."""
    try:
        return parse_reference_string(text)
    except ReferenceParseError:
        st.error("Please enter valid numbers separated by spaces or commas")
        return None


# Configure the Streamlit page
st.set_page_config(page_title="Page Replacement Algorithm Visualizer", layout="wide")

# -----------------------------------------------------------------------------
# SIDEBAR NAVIGATION
# -----------------------------------------------------------------------------

view = st.sidebar.radio("Choose View", ["Home", "Visualizer", "Compare"])

st.title("Page Replacement Algorithm Visualizer")

# =============================================================================
# HOME PAGE - Educational Content
# =============================================================================

if view == "Home":
    st.subheader("Understand how operating systems manage memory through "
                 "interactive visualizations")
    st.markdown(
        """
        ## What is Paging?
        **Paging** is a memory management scheme that eliminates the need for
        contiguous allocation of physical memory. It allows the physical address
        space of a process to be non-contiguous.

        The computer's memory is divided into fixed-size blocks called
        **frames**, and each process is divided into blocks of the same size
        called **pages**.

        When a program needs to be executed, its pages are loaded into available
        memory frames. If a required page is not in memory (a **page fault**),
        the operating system must replace an existing page with the required one.
        """
    )

    st.header("Page Replacement")
    st.write("When a page fault occurs, the operating system needs to choose "
             "which page to replace")
    cards = st.columns(3)
    cards[0].markdown("#### 🕒 FIFO\nFirst-In-First-Out replaces the oldest page "
                      "in memory, regardless of how frequently it's used.")
    cards[1].markdown("#### 🔁 LRU\nLeast Recently Used replaces the page that "
                      "hasn't been used for the longest period of time.")
    cards[2].markdown("#### 🎯 Optimal\nReplaces the page that will not be used "
                      "for the longest period of time in the future.")

    st.header("How Page Replacement Works")
    st.markdown(
        """
        1. **Page Fault Occurs:** When a process requests a page that is not
           currently in memory, a page fault is triggered.
        2. **Find Empty Frame:** If there is an empty frame available, the OS
           allocates it to the requested page.
        3. **Replacement Decision:** If no empty frames are available, the OS must
           select a victim page to replace using a page replacement algorithm.
        4. **Page Replacement:** The victim page is removed from memory, and the
           requested page is loaded into the freed frame.
        5. **Update Tables:** The page tables are updated to reflect the new
           memory state.

        ---
        Choose **Visualizer** in the sidebar to see it in action.
        """
    )
    st.stop()  # Stop rendering - don't show simulator on Home page

# =============================================================================
# COMPARE PAGE - All policies on one reference string
# =============================================================================

if view == "Compare":
    st.header("Policy Comparison")

    cmp_text = st.sidebar.text_input("Reference string", value=BELADY_REFERENCE_STRING)
    cmp_frames = st.sidebar.number_input("Number of frames", min_value=1,
                                         max_value=MAX_FRAME_COUNT,
                                         value=DEFAULT_FRAME_COUNT, step=1)

    cmp_refs = read_reference_string(cmp_text)
    if cmp_refs is None:
        st.stop()
    if len(cmp_refs) == 0:
        st.warning("No pages to run")
        st.stop()

    results = compare_policies(cmp_refs, int(cmp_frames))

    fig = go.Figure()
    fig.add_trace(go.Bar(name="Faults", x=list(results),
                         y=[r.faults for r in results.values()]))
    fig.add_trace(go.Bar(name="Hits", x=list(results),
                         y=[r.hits for r in results.values()]))
    fig.update_layout(barmode="group", height=320,
                      title=f"Hits vs Faults with {int(cmp_frames)} frames")
    st.plotly_chart(fig, use_container_width=True)

    st.table([{"policy": p, **r.get_stats()} for p, r in results.items()])

    # ----- Faults vs frame count (Belady's anomaly) -----
    capacities = range(1, MAX_FRAME_COUNT + 1)
    fig2 = go.Figure()
    for p in ReplacementPolicy.ALL:
        curve = fault_curve(cmp_refs, p, capacities)
        fig2.add_trace(go.Scatter(x=[c for c, _ in curve], y=[f for _, f in curve],
                                  mode="lines+markers", name=p))
    fig2.update_layout(height=360, title="Page faults vs number of frames",
                       xaxis_title="Frames", yaxis_title="Faults")
    st.plotly_chart(fig2, use_container_width=True)
    st.markdown(
        "**Belady's anomaly**: under FIFO, adding frames can *increase* the number "
        "of faults (try `1 2 3 4 1 2 5 1 2 3 4 5` with 3 and 4 frames). LRU and "
        "Optimal never show it."
    )
    st.stop()

# =============================================================================
# VISUALIZER PAGE - Main Interactive Interface
# =============================================================================

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Configuration")

if "reference_text" not in st.session_state:
    st.session_state.reference_text = DEFAULT_REFERENCE_STRING


def _randomize_reference_string():
    pages = random_reference_string(length=15, max_page=7)
    st.session_state.reference_text = format_reference_string(pages)


st.sidebar.button("Random workload", on_click=_randomize_reference_string)

reference_text = st.sidebar.text_input("Reference String", key="reference_text",
                                       placeholder="e.g. 7 0 1 2 0 3 0 4 2 3")
frame_count = st.sidebar.number_input("Number of Frames", min_value=1,
                                      max_value=MAX_FRAME_COUNT,
                                      value=DEFAULT_FRAME_COUNT, step=1)
policy = st.sidebar.selectbox("Algorithm", options=list(ReplacementPolicy.ALL),
                              format_func=POLICY_LABELS.get)

references = read_reference_string(reference_text)

if st.sidebar.button("Generate Visualization", disabled=references is None):
    if len(references) == 0:
        st.sidebar.warning("No pages to run")
    else:
        try:
            result = simulate(references, int(frame_count), policy)
        except InvalidConfiguration as e:
            st.sidebar.error(str(e))
        else:
            st.session_state.result = result
            st.session_state.playback = Playback(total_steps=len(result.steps))

st.sidebar.markdown("---")

speed = st.sidebar.slider("Speed (steps/sec)", min_value=MIN_SPEED,
                          max_value=MAX_SPEED, value=1.0, step=0.5)

result = st.session_state.get("result")
if result is None:
    st.info("Set up the simulation parameters and click **Generate Visualization**.")
    st.stop()

playback: Playback = st.session_state.playback
playback.set_speed(speed)

st.header("Visualization")
st.caption(POLICY_DESCRIPTIONS[result.policy])

# -----------------------------------------------------------------------------
# PLAYBACK CONTROLS
# -----------------------------------------------------------------------------

c_play, c_step, c_reset, c_end, c_count = st.columns([1, 1, 1, 1, 2])
if playback.playing:
    c_play.button("Pause", on_click=playback.pause)
else:
    c_play.button("Play", on_click=playback.play)
c_step.button("Step", on_click=playback.step_forward)
c_reset.button("Reset", on_click=playback.reset)
c_end.button("Skip to End", on_click=playback.skip_to_end)
c_count.write(f"Step: {playback.current_step} / {playback.last_step}")

step = result.steps[playback.current_step]

col1, col2 = st.columns([1, 2])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Current request, statistics, event log
# -----------------------------------------------------------------------------

with col1:
    if not step.is_initial:
        st.subheader("Current Page Request")
        st.markdown(f"## {step.page}")
        if step.is_fault:
            st.error("Page Fault")
        else:
            st.success("Page Hit")

    hits, faults = result.counts_upto(playback.current_step)
    m_hits, m_faults = st.columns(2)
    m_hits.metric("Page Hits", hits)
    m_faults.metric("Page Faults", faults)

    r_hit, r_fault = st.columns(2)
    r_hit.metric("Hit Ratio", format_ratio(ratio(hits, hits + faults)))
    r_hit.caption("Formula: Hits / (Hits + Faults)")
    r_fault.metric("Fault Ratio", format_ratio(ratio(faults, hits + faults)))
    r_fault.caption("Formula: Faults / (Hits + Faults)")

    st.subheader("Eviction Order (next victim first)")
    st.write(list(step.eviction_order))

    # Event log (most recent 20 events, newest first)
    st.subheader("Event Log")
    for ev in result.events_upto(playback.current_step)[-20:][::-1]:
        st.write(ev)

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Visualizations
# -----------------------------------------------------------------------------

with col2:
    st.subheader("Physical Frames")
    st.plotly_chart(frames_figure(result, playback.current_step),
                    use_container_width=True)

    if not step.is_initial:
        st.subheader("Access Timeline")
        st.plotly_chart(timeline_figure(result, playback.current_step),
                        use_container_width=True)

# -----------------------------------------------------------------------------
# PLAYBACK LOOP - advance one precomputed snapshot per tick
# -----------------------------------------------------------------------------

if playback.playing:
    time.sleep(playback.delay)
    playback.tick()
    st.rerun()
