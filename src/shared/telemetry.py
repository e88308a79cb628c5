import logging
import os
import sys
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

# --- Prometheus Imports ---
from prometheus_client import REGISTRY, Counter, Histogram

# --- Trace id of the current user action ---
trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="system")

# --- Prometheus Metric Definitions ---
DURATION_METRIC = "newsquiz_method_duration_seconds"
FETCH_METRIC = "newsquiz_quiz_fetch"

# Explicitly declare the types for module-level usage
METHOD_DURATION: Histogram
QUIZ_FETCHES: Counter

try:
    METHOD_DURATION = Histogram(
        DURATION_METRIC, "Time spent in method", ["component", "method"]
    )
except ValueError:
    # Streamlit re-imports modules on rerun; reuse the registered collector.
    METHOD_DURATION = cast(Histogram, REGISTRY._names_to_collectors[DURATION_METRIC])

try:
    QUIZ_FETCHES = Counter(FETCH_METRIC, "Quiz fetch attempts by outcome", ["outcome"])
except ValueError:
    # Counters register under both the base name and the _total suffix.
    QUIZ_FETCHES = cast(Counter, REGISTRY._names_to_collectors[FETCH_METRIC])

# --- Type Definitions for Decorator ---
P = ParamSpec("P")
R = TypeVar("R")


def measure_time(metric_name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator for timing methods + logging.
    Uses ParamSpec to preserve the signature of the decorated function.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = time.perf_counter()

            # Used on instance methods, so args[0] is 'self'.
            self_obj: Any = args[0] if args else None

            component = self_obj.__class__.__name__ if self_obj else "Unknown"
            method = func.__name__
            telemetry = getattr(self_obj, "telemetry", None)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start
                METHOD_DURATION.labels(component=component, method=method).observe(
                    duration
                )
                if telemetry:
                    telemetry.log_error(
                        f"💥 Failed: {metric_name}",
                        e,
                        duration_ms=round(duration * 1000, 2),
                    )
                raise

            duration = time.perf_counter() - start
            METHOD_DURATION.labels(component=component, method=method).observe(
                duration
            )
            if telemetry:
                telemetry.log_info(
                    f"⏱️ {metric_name}", duration_ms=round(duration * 1000, 2)
                )
            return result

        return wrapper

    return decorator


def record_fetch(outcome: str) -> None:
    """Counts a quiz fetch as 'success', 'failed' or 'stale'."""
    QUIZ_FETCHES.labels(outcome=outcome).inc()


class Telemetry:
    """
    Per-component logger that stamps every line with the current trace id.

    One trace covers one user action (fetch, check, restart), so all log lines
    of that action can be grepped together across the engine, the view model
    and the adapters.
    """

    def __init__(self, component_name: str) -> None:
        self.component = component_name
        self.logger: logging.Logger
        self._setup_logger()

    def _setup_logger(self) -> None:
        self.logger = logging.getLogger(f"newsquiz.{self.component}")

        # Console fallback when the host app has not configured logging
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            self.logger.addHandler(handler)
            self.logger.setLevel(os.getenv("NEWSQUIZ_LOG_LEVEL", "INFO").upper())

    def __getstate__(self) -> dict[str, Any]:
        """Loggers hold locks; SessionEngine is pickled with its Telemetry."""
        state = self.__dict__.copy()
        state.pop("logger", None)
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._setup_logger()

    @staticmethod
    def start_trace() -> str:
        trace_id = uuid.uuid4().hex[:8]
        trace_id_ctx.set(trace_id)
        return trace_id

    @staticmethod
    def get_trace_id() -> str:
        return trace_id_ctx.get()

    def _format(self, event: str, fields: dict[str, Any]) -> str:
        details = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"[{self.get_trace_id()}] {event}" + (f" | {details}" if details else "")

    def log_info(self, event: str, **kwargs: Any) -> None:
        self.logger.info(self._format(event, kwargs))

    def log_warning(self, event: str, **kwargs: Any) -> None:
        self.logger.warning(self._format(event, kwargs))

    def log_error(self, event: str, error: Exception, **kwargs: Any) -> None:
        self.logger.error(
            self._format(f"❌ {event}", {"error": error, **kwargs}), exc_info=True
        )
