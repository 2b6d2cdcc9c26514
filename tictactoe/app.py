from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Config, configure_logging
from .errors import (
    ConflictError,
    GameServiceError,
    InvalidInputError,
    InvalidStateTransitionError,
    NotFoundError,
)
from .routers import games as games_router
from .routers import leaderboard as leaderboard_router
from .routers import players as players_router
from .services import Services
from .state import AppContext

logger = logging.getLogger(__name__)

# Error taxonomy -> (HTTP status, "error" label)
ERROR_RESPONSES = {
    NotFoundError: (404, "Not found"),
    InvalidInputError: (400, "Bad Request"),
    InvalidStateTransitionError: (400, "Bad Request"),
    ConflictError: (409, "Conflict"),
}


async def handle_service_error(request: Request, exc: GameServiceError) -> JSONResponse:
    status_code, label = ERROR_RESPONSES.get(type(exc), (500, "Server Error"))
    logger.debug("%s %s -> %d: %s", request.method, request.url.path, status_code, exc.message)
    return JSONResponse(status_code=status_code, content={"error": label, "message": exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": "Bad Request", "message": message})


def create_app(config_class=Config, context: Optional[AppContext] = None) -> FastAPI:
    configure_logging(config_class.LOG_LEVEL)

    app = FastAPI(title="Tic Tac Toe API")
    app.state.config = config_class
    app.state.services = Services(context)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config_class.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GameServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    # Register routers
    app.include_router(games_router.router)
    app.include_router(players_router.router)
    app.include_router(leaderboard_router.router)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()

__all__ = ["app", "create_app"]

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=Config.HOST, port=Config.PORT)
