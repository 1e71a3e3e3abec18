# /bexswap/core/logger.py
import logging
import uuid
import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars
import sentry_sdk
from prometheus_client import Counter
from bexswap.core.config import settings

# --- Prometheus Metrics ---
SWAPS_EXECUTED = Counter("bexswap_swaps_executed_total", "Total number of confirmed swaps")
APPROVALS_SUBMITTED = Counter("bexswap_approvals_submitted_total", "Total number of approval transactions submitted")
SWAPS_FAILED = Counter("bexswap_swaps_failed_total", "Total number of failed swap workflows", ["stage"])

def configure_logging():
    if settings.SENTRY_DSN:
        sentry_sdk.init(dsn=settings.SENTRY_DSN.get_secret_value(), traces_sample_rate=1.0)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(settings.LOG_LEVEL)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

def get_logger(name: str):
    return structlog.get_logger(name)

def bind_swap_id() -> str:
    """Tags every log line of the current swap workflow with a fresh id."""
    swap_id = uuid.uuid4().hex
    bind_contextvars(swap_id=swap_id)
    return swap_id

def clear_swap_id():
    unbind_contextvars("swap_id")

configure_logging()
log = get_logger("BEXSWAP.System")
