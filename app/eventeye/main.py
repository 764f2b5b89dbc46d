import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventeye.core.config import settings
from eventeye.core.logging import setup_logging
from eventeye.controller.workspace import WorkspaceRegistry
from eventeye.errors import BackendError, EventEyeError, ValidationError, friendly_message

from eventeye.routes.auth_route import router as AuthRouter
from eventeye.routes.profile_route import router as ProfileRouter
from eventeye.routes.event_route import router as EventRouter
from eventeye.routes.workspace_route import router as WorkspaceRouter
from eventeye.routes.message_route import router as MessageRouter
from eventeye.routes.explore_route import router as ExploreRouter

from eventeye.database import Base, engine
from eventeye.models import user_model, profile_model, event_model, interest_model, message_model  # noqa: F401
from eventeye.response_model import ErrorResponseModel

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.PROJECT_NAME} {settings.VERSION}")
    # Create all tables (must be after importing all models)
    Base.metadata.create_all(bind=engine)
    yield
    logger.info("Shutting down")


app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)
app.state.workspaces = WorkspaceRegistry()


@app.exception_handler(EventEyeError)
async def eventeye_error_handler(request: Request, exc: EventEyeError):
    message = friendly_message(exc) if isinstance(exc, BackendError) else exc.message
    extra = {}
    if isinstance(exc, ValidationError):
        extra["fields"] = exc.fields
    if hasattr(exc, "failed_step"):
        extra["failed_step"] = exc.failed_step
        extra["completed_steps"] = exc.completed_steps
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponseModel(exc.title, exc.status_code, message, **extra),
    )


app.include_router(AuthRouter, tags=["Auth"], prefix="/auth")
app.include_router(ProfileRouter, tags=["Profile"], prefix="/profile")
app.include_router(EventRouter, tags=["Event"], prefix="/event")
app.include_router(WorkspaceRouter, tags=["Workspace"], prefix="/workspace")
app.include_router(MessageRouter, tags=["Message"], prefix="/message")
app.include_router(ExploreRouter, tags=["Explore"], prefix="/explore")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["POST", "GET", "OPTIONS", "DELETE", "PUT"],
    allow_headers=["*"],
)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=False)
