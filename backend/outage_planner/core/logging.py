import logging
import sys
import uuid
from contextlib import contextmanager

import structlog

def configure_logging(env: str = "dev", level: str = "INFO") -> None:
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if env == "prod":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=env == "dev")

    structlog.configure(
        processors=shared_processors + [renderer],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

@contextmanager
def import_log_context(file_name: str, user_id: int):
    """Tag every event of one import run so interleaved uploads can be told apart."""
    with structlog.contextvars.bound_contextvars(
        import_id=uuid.uuid4().hex[:12], file_name=file_name, user_id=user_id
    ):
        yield

logger = structlog.get_logger()
