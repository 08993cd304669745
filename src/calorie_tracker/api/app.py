"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from calorie_tracker.api.tools import find_tool, tool_descriptors
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import parse_allowed_user_ids
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.errors import TrackerError

HTTP_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    allowed_user_ids = parse_allowed_user_ids(container.settings.allowed_user_ids)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    async def resolve_user_id(
        request: Request,
        authorization: str | None = Header(default=None),
        x_user_id: str | None = Header(default=None),
    ) -> str:
        """Authenticate the caller and return the user the call acts for."""
        state_container: AppContainer = request.app.state.container
        api_token = state_container.settings.api_token
        if api_token and authorization != f"Bearer {api_token}":
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        user_id = (x_user_id or "").strip() or state_container.settings.default_user_id
        if allowed_user_ids is not None and user_id not in allowed_user_ids:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
        return user_id

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(
        request: Request, exc: TrackerError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=HTTP_UNPROCESSABLE,
            content={"detail": str(exc), "error": type(exc).__name__},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/tools")
    async def list_tools() -> dict[str, object]:
        """Return the descriptors of every available tool."""
        return {"tools": tool_descriptors()}

    @app.post("/tools/{tool_name}")
    def call_tool(
        tool_name: str,
        request: Request,
        user_id: str = Depends(resolve_user_id),
        arguments: dict[str, Any] | None = Body(default=None),
    ) -> dict[str, object]:
        """Validate arguments and run a tool for the resolved user."""
        state_container: AppContainer = request.app.state.container
        definition = find_tool(tool_name)
        if definition is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown tool: {tool_name}",
            )
        try:
            parsed = definition.arguments.model_validate(arguments or {})
        except ValidationError as exc:
            logger.warning(
                "Tool arguments rejected",
                extra={"tool": tool_name, "user_id": user_id},
            )
            raise HTTPException(
                status_code=HTTP_UNPROCESSABLE,
                detail=exc.errors(
                    include_url=False, include_context=False, include_input=False
                ),
            ) from exc
        try:
            result = definition.handler(state_container, user_id, parsed)
        except TrackerError:
            logger.info(
                "Tool call rejected", extra={"tool": tool_name, "user_id": user_id}
            )
            raise
        except Exception:
            logger.exception(
                "Tool call failed", extra={"tool": tool_name, "user_id": user_id}
            )
            raise
        return {"tool": tool_name, "result": result}

    return app
