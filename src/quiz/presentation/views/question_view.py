import html

import streamlit as st

from src.quiz.presentation.viewmodel import QuizViewModel
from src.quiz.presentation.views import components


def question_heading(number: int, text: str) -> str:
    """Generated question text is escaped before it goes into raw HTML."""
    return f'<div class="question-text">{number}. {html.escape(text)}</div>'


def _question_header(vm: QuizViewModel) -> None:
    q = vm.current_question
    st.markdown(
        question_heading(vm.engine.current_index + 1, q.text),
        unsafe_allow_html=True,
    )


def render_active(vm: QuizViewModel) -> None:
    engine = vm.engine
    q = vm.current_question
    _question_header(vm)

    selected = engine.selected_answer
    # Widget keys include the fetch ticket so a new quiz never inherits old picks.
    key = f"q_{vm.state.get('fetch_ticket', 0)}_{engine.current_index}"
    choice = st.radio(
        "Svar",
        q.options,
        index=q.options.index(selected) if selected in q.options else None,
        key=key,
        label_visibility="collapsed",
        disabled=vm.is_loading,
    )

    if choice is not None and choice != selected:
        vm.select_answer(choice)

    if st.button("Sjekk svar", type="primary", disabled=choice is None):
        vm.check_answer()
        st.rerun()


def render_feedback(vm: QuizViewModel) -> None:
    engine = vm.engine
    q = vm.current_question
    result = engine.last_result
    _question_header(vm)

    for option in q.options:
        if option == q.correct_answer:
            st.markdown(f"✅ **{option}**")
        elif option == result.selected:
            st.markdown(f"❌ ~~{option}~~")
        else:
            st.markdown(f"▫️ {option}")

    if result.correct:
        st.success(f"✔️ Riktig! +{result.points} poeng")
    else:
        st.error(f"❌ Feil. Riktig svar: {result.correct_answer}")

    components.animate_score(vm, template="**Poeng: {}**")

    label = "Se resultat 🏁" if engine.is_last_question else "Neste spørsmål ➡️"
    if st.button(label, type="primary", use_container_width=True):
        vm.next_step()
        st.rerun()
