import os
import logging
import streamlit as st

# --- OTel & Observability Imports ---
from opentelemetry import trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource

# --- OTel Logging Imports ---
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter

# --- Prometheus Import ---
from prometheus_client import start_http_server

# --- Application Imports ---
from src.config import GameConfig, ScoringMode
from src.fsm import SessionPhase
from src.quiz.adapters.article_repository import FileArticleRepository
from src.quiz.adapters.openai_generator import OpenAIQuizGenerator
from src.quiz.application.supplier import NewsQuizSupplier
from src.quiz.presentation.state_provider import StreamlitStateProvider
from src.quiz.presentation.viewmodel import QuizViewModel
from src.quiz.presentation.views import components, question_view, summary_view


# --- 1. Configure Observability ---
def configure_observability():
    """
    Sends traces and logs over OTLP when the exporter env vars are set.
    Starts a background Prometheus server for metrics.
    """
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    headers = os.getenv("OTEL_EXPORTER_OTLP_HEADERS")

    if not endpoint or not headers:
        logging.warning("OTEL env vars not set. Telemetry will not be exported.")
    else:
        resource = Resource.create({"service.name": "news-quiz-app"})

        # --- A. TRACING SETUP ---
        trace_provider = TracerProvider(resource=resource)
        otlp_trace_exporter = OTLPSpanExporter(endpoint=endpoint, headers=headers)
        trace_provider.add_span_processor(BatchSpanProcessor(otlp_trace_exporter))
        trace.set_tracer_provider(trace_provider)

        # --- B. LOGGING SETUP ---
        logger_provider = LoggerProvider(resource=resource)
        otlp_log_exporter = OTLPLogExporter(endpoint=endpoint, headers=headers)
        logger_provider.add_log_record_processor(BatchLogRecordProcessor(otlp_log_exporter))
        set_logger_provider(logger_provider)

        handler = LoggingHandler(level=logging.INFO, logger_provider=logger_provider)
        logging.getLogger().addHandler(handler)

    # --- C. METRICS SETUP (Prometheus) ---
    port = int(os.getenv("PROMETHEUS_PORT", "8000"))
    try:
        start_http_server(port)
        logging.info(f"Prometheus metrics server started on port {port}")
    except OSError:
        logging.warning(f"Prometheus port {port} already in use (likely Streamlit reload). Skipping.")


# --- 2. Bootstrap Application ---

# Initialize Observability ONCE per session
if "observability_configured" not in st.session_state:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')

    configure_observability()
    st.session_state.observability_configured = True


# --- 3. Dependency Injection (Composition Root) ---
@st.cache_resource
def get_supplier():
    return NewsQuizSupplier(
        articles=FileArticleRepository(GameConfig.ARTICLES_DIR),
        generator=OpenAIQuizGenerator(),
    )


def render_start(vm: QuizViewModel):
    st.title(f"📰 {GameConfig.APP_TITLE}")
    if GameConfig.SCORING_MODE == ScoringMode.TIMER:
        st.write(
            f"{GameConfig.BASE_POINTS} poeng per riktig svar + opptil "
            f"{GameConfig.MAX_TIME_BONUS} bonuspoeng basert på hvor raskt du svarer."
        )
    else:
        st.write(
            f"{GameConfig.BASE_POINTS} poeng per riktig svar + "
            f"{GameConfig.BONUS_POINTS} bonuspoeng for hvert svar på rad."
        )

    if vm.fetch_error:
        st.error(vm.fetch_error)

    if st.button("Generer quiz", type="primary", disabled=vm.is_loading):
        with st.spinner("Genererer quiz..."):
            vm.fetch_quiz()
        st.rerun()


def main():
    st.set_page_config(page_title=GameConfig.APP_TITLE, layout="centered")
    components.apply_styles()

    # Wiring
    vm = QuizViewModel(get_supplier(), StreamlitStateProvider())

    # --- 4. Main Router (FSM) ---
    state = vm.current_state

    if state == SessionPhase.EMPTY:
        render_start(vm)

    elif state == SessionPhase.QUESTION_ACTIVE:
        if vm.engine.countdown is not None:
            components.render_countdown(vm)
        components.render_dashboard(vm.get_dashboard_config())
        question_view.render_active(vm)

    elif state == SessionPhase.FEEDBACK_VIEW:
        if vm.engine.countdown is not None:
            components.render_countdown(vm)
        components.render_dashboard(vm.get_dashboard_config())
        question_view.render_feedback(vm)

    elif state == SessionPhase.COMPLETE:
        summary_view.render(vm)


if __name__ == "__main__":
    main()
