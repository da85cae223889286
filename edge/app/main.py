from contextlib import asynccontextmanager
from typing import Callable

import uvicorn
from fastapi import FastAPI
from loguru import logger

from edge.app.composition import EdgeDependencies, create_edge_dependencies
from edge.app.config.settings import Settings
from edge.app.core import API_VERSION, SERVICE_NAME, SERVICE_TITLE
from edge.app.core.logging import configure_logging
from edge.app.routers.admin import admin_router
from edge.app.routers.auth import auth_router
from edge.app.routers.blog import blog_router
from edge.app.routers.consultations import consultations_router
from edge.app.routers.contact import contact_router
from edge.app.routers.government import government_router
from edge.app.routers.health import health_router
from edge.app.routers.newsletter import newsletter_router
from edge.app.routers.services import services_router
from edge.app.routers.support import support_router
from edge.app.routers.working_hours import working_hours_router


def create_app(
    dependencies_factory: Callable[[], EdgeDependencies] = create_edge_dependencies,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.bind(service_name=SERVICE_NAME, event="edge_starting").info("")
        dependencies = dependencies_factory()
        try:
            # Cold start: bootstrap runs once per process and never raises.
            app.state.bootstrap_report = await dependencies.bootstrapper.run()
            app.state.settings = dependencies.settings
            app.state.baas_client = dependencies.baas_client
            app.state.access_guard = dependencies.access_guard
            yield
        finally:
            logger.bind(service_name=SERVICE_NAME, event="edge_stopping").info("")
            await dependencies.close()

    app = FastAPI(
        title=SERVICE_TITLE,
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(blog_router)
    app.include_router(contact_router)
    app.include_router(working_hours_router)
    app.include_router(services_router)
    app.include_router(consultations_router)
    app.include_router(support_router)
    app.include_router(newsletter_router)
    app.include_router(government_router)
    app.include_router(admin_router)
    return app


app = create_app()


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
