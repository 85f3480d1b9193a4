from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool

from consultation_scheduler.api.v1.scheduling import router as scheduling_router
from consultation_scheduler.application.ports.consultation_api import ConsultationApiPort
from consultation_scheduler.core.config import Settings, settings
from consultation_scheduler.core.logging_config import configure_logging
from consultation_scheduler.wiring.dependencies import build_booking_store


def create_app(config: Settings = settings, api: ConsultationApiPort | None = None) -> FastAPI:
    store = build_booking_store(config, api)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # refresh() does blocking HTTP calls; keep them off the event loop.
        await run_in_threadpool(store.refresh)
        yield

    app = FastAPI(title="Consultation Scheduler", version="1.0.0", lifespan=lifespan)
    app.state.settings = config
    app.state.booking_store = store
    app.include_router(scheduling_router, prefix="/api/v1", tags=["scheduling"])

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


configure_logging(settings.LOG_LEVEL)
app = create_app()
