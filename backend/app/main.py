import asyncio
import signal
from contextlib import contextmanager
from typing import Iterator

import uvicorn
from fastapi import FastAPI
from loguru import logger

from backend.app.composition import AppDependencies, database_session
from backend.app.config.settings import Settings
from backend.app.core import API_VERSION, SERVICE_NAME
from backend.app.core.logging import configure_logging
from backend.app.routers.contact import contact_router
from backend.app.routers.health import health_router


def _log(event: str, **kwargs) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class _Server(uvicorn.Server):
    """uvicorn server that leaves signal handling to `serve`, so shutdown unwinds the database session."""

    @contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


def create_app(dependencies: AppDependencies | None = None) -> FastAPI:
    app = FastAPI(
        title="RemoteCyberHelp API",
        version=API_VERSION,
    )
    if dependencies is not None:
        app.state.settings = dependencies.settings
        app.state.database = dependencies.database
        app.state.contact_repository = dependencies.contact_repository

    app.include_router(health_router)
    app.include_router(contact_router)
    return app


async def serve(settings: Settings) -> None:
    """Run the HTTP server inside a database session; the connection is closed before returning."""
    async with database_session(settings) as dependencies:
        app = create_app(dependencies)
        server = _Server(uvicorn.Config(app, host=settings.host, port=settings.port))

        def request_shutdown() -> None:
            _log("shutdown_signal")
            server.should_exit = True

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, request_shutdown)
            except NotImplementedError:
                pass

        _log("backend_started", host=settings.host, port=settings.port)
        await server.serve()


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level)
    _log("backend_starting", environment=settings.environment)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        _log("backend_interrupted")
    _log("backend_stopped")


if __name__ == "__main__":
    main()
