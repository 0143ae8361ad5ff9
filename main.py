from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from roster.api.roster_client import RosterClient
from roster.api.v1 import api_router
from roster.config import settings
from roster.controller.roster_controller import RosterController
from roster.utils.logger import ActivityLogger


def create_app(
    client: Optional[RosterClient] = None,
    activity_logger: Optional[ActivityLogger] = None,
    refresh_on_startup: Optional[bool] = None
) -> FastAPI:
    """Build the application. The roster controller lives for the app's lifespan."""
    if refresh_on_startup is None:
        refresh_on_startup = settings.refresh_on_startup

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        controller = RosterController(
            client=client or RosterClient(),
            activity_logger=activity_logger or ActivityLogger()
        )
        app.state.roster_controller = controller
        if refresh_on_startup:
            await controller.refresh()
        yield
        del app.state.roster_controller

    app = FastAPI(
        title=settings.app_name,
        description="Student roster manager backed by a remote student REST API",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan
    )

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "message": f"Welcome to {settings.app_name}",
            "description": "List, add, view, edit and delete students"
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
