from contextlib import asynccontextmanager
import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from chat_hub import BroadcastHub
from config import Settings, settings as default_settings
from database import Base, make_engine, make_session_factory
from logs import configure_logging
from realtime import ConnectionRegistry
from routers import api_router
from services.tasks import TaskStore
import models.task  # ensure model registration

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    hub: BroadcastHub = app.state.chat_hub
    hub.start()
    try:
        yield
    finally:
        await hub.stop()
        await app.state.chat_registry.close_all()
        app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        settings = default_settings
    else:
        settings._post_init()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE, settings.LOG_MAX_DAYS)

    app = FastAPI(title=settings.PROJECT_NAME, debug=settings.DEBUG, lifespan=lifespan)
    app.state.settings = settings

    # Task store: tables are created directly, there are no migrations to run
    engine = make_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    app.state.engine = engine
    app.state.task_store = TaskStore(make_session_factory(engine))

    # Chat relay: one registry and one hub per application
    registry = ConnectionRegistry()
    app.state.chat_registry = registry
    app.state.chat_hub = BroadcastHub(registry, maxsize=settings.CHAT_INBOUND_QUEUE_SIZE)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)

    # Mounted last so API routes take precedence
    if os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
    else:
        logger.info("Static directory %s not found; not serving static files", settings.STATIC_DIR)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=default_settings.HOST, port=default_settings.PORT)
