import time

import streamlit as st

from src.config import GameConfig
from src.quiz.presentation.viewmodel import DashboardConfig, QuizViewModel


def apply_styles():
    st.markdown("""
        <style>
            .block-container { padding-top: 2rem !important; }
            .stat-box { padding: 10px; background-color: #f0f2f6; border-radius: 5px; text-align: center; font-weight: bold; }
            .question-text { font-size: 1.2rem; font-weight: 600; margin-bottom: 1rem; }
            .low-time { color: #dc2626; }
        </style>
    """, unsafe_allow_html=True)


def render_dashboard(config: DashboardConfig):
    col1, col2, col3 = st.columns(3)
    col1.markdown(f'<div class="stat-box">🏆 {config.displayed_score} poeng</div>', unsafe_allow_html=True)
    col2.markdown(f'<div class="stat-box">🔥 Rekke: {config.streak}</div>', unsafe_allow_html=True)
    col3.markdown(f'<div class="stat-box">⭐ Beste: {config.best_streak}</div>', unsafe_allow_html=True)

    st.progress(config.progress_value, text=config.progress_text)


def animate_score(vm: QuizViewModel, template: str = "{} poeng") -> None:
    """Steps the displayed score up to the real score, one frame per interval."""
    placeholder = st.empty()
    placeholder.markdown(template.format(vm.engine.displayed_score))
    interval = GameConfig.SCORE_ANIMATION_INTERVAL_MS / 1000
    for value in vm.engine.animator.run():
        placeholder.markdown(template.format(value))
        time.sleep(interval)


@st.fragment(run_every=1)
def render_countdown(vm: QuizViewModel) -> None:
    """Re-runs every second; forces a full rerun once time is up."""
    if vm.tick_clock():
        st.rerun()

    config = vm.get_dashboard_config()
    if config.time_left is None:
        return
    css = "low-time" if config.low_time else ""
    st.markdown(
        f'<p class="{css}"><b>Tid igjen: {config.time_left} sekunder</b></p>',
        unsafe_allow_html=True,
    )
