import streamlit as st

from src.quiz.presentation.viewmodel import QuizViewModel
from src.quiz.presentation.views import components


def render(vm: QuizViewModel) -> None:
    summary = vm.get_summary()

    st.title("🏁 Resultat")
    if vm.fetch_error:
        st.error(vm.fetch_error)
    components.animate_score(vm, template="## {} poeng 🎉")

    st.subheader(summary.medal.title)

    col1, col2 = st.columns(2)
    col1.metric("Riktige svar", f"{summary.correct_answers} av {summary.total_questions}")
    col2.metric("Beste rekke", summary.best_streak)

    ratio = vm.engine.displayed_score / summary.max_score if summary.max_score else 0.0
    st.progress(min(ratio, 1.0), text=f"{vm.engine.displayed_score} / {summary.max_score} poeng")

    with st.expander("Dine svar"):
        for i, result in enumerate(summary.results, start=1):
            if result.correct:
                st.markdown(f"{i}. ✔️ Riktig! +{result.points} poeng")
            else:
                st.markdown(f"{i}. ❌ Feil. Riktig svar: {result.correct_answer}")
        unanswered = summary.total_questions - len(summary.results)
        if unanswered > 0:
            st.caption(f"{unanswered} spørsmål ble ikke besvart før tiden var ute.")

    st.markdown("---")
    col_a, col_b = st.columns(2)

    with col_a:
        if st.button("🔄 Prøv igjen", type="secondary", use_container_width=True):
            vm.restart()
            st.rerun()

    with col_b:
        if st.button("📰 Ny quiz", type="primary", use_container_width=True):
            with st.spinner("Genererer quiz..."):
                vm.fetch_quiz()
            st.rerun()
