import time
import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from outage_planner.core.config import settings
from outage_planner.core.logging import configure_logging, logger
from outage_planner.api.router import api_router
from outage_planner.db.session import engine
from outage_planner.db.base import Base
from outage_planner.services.batch import PendingBatchNotEmpty, PendingBatchRegistry
from outage_planner.services.seed import seed_demo

def create_app() -> FastAPI:
    configure_logging(settings.ENV, settings.LOG_LEVEL)
    app = FastAPI(title="Power Outage Request Planner", version="0.1.0")
    # pending batches are per caller and per process; nothing is persisted before submit
    app.state.pending_batches = PendingBatchRegistry()

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request.headers.get("x-request-id") or uuid.uuid4().hex[:12],
            path=request.url.path,
        )
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "http_request",
            method=request.method,
            status=response.status_code,
            ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response

    @app.exception_handler(PendingBatchNotEmpty)
    async def pending_not_empty(_request: Request, e: PendingBatchNotEmpty):
        return JSONResponse(
            status_code=409,
            content={"detail": {"reason": e.reason, "message": str(e), "count": e.count}},
        )

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.on_event("startup")
    def _startup():
        # dev only; other environments run alembic
        if settings.ENV == "dev":
            Base.metadata.create_all(bind=engine)
            if settings.SEED_DEMO:
                seed_demo()

    app.include_router(api_router)
    logger.info("app_started", env=settings.ENV, tz=settings.TZ, min_lead_days=settings.MIN_LEAD_DAYS)
    return app

app = create_app()
