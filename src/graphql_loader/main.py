"""
FastAPI app serving an aggregated GraphQL API.

Usage:
    # app.py next to a `types/` folder
    from graphql_loader.main import create_app

    app = create_app("./types")

    # then
    uvicorn app:app --reload
"""
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import partial
from typing import Any, TypedDict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from graphql import graphql
from pydantic import BaseModel

from graphql_loader.core import init_settings
from graphql_loader.core.config import Settings
from graphql_loader.core.errors import FactoryError
from graphql_loader.loader import caller_dir, load
from graphql_loader.models.result import AggregateResult
from graphql_loader.server.schema import get_context, make_executable_schema

logger = logging.getLogger(__name__)


class GraphQLRequest(BaseModel):
    query: str
    variables: dict[str, Any] | None = None
    operationName: str | None = None


class State(TypedDict):
    """Lifespan state."""
    pass


def create_app(
    source: str | os.PathLike | AggregateResult,
    settings: Settings | None = None,
    *,
    base_dir: str | os.PathLike | None = None,
) -> FastAPI:
    """Create the app for an API tree path or an already aggregated result.

    Relative paths resolve against ``base_dir``, defaulting to the directory
    of the module that called ``create_app``.
    """
    if settings is None:
        settings = init_settings.settings

    if isinstance(source, AggregateResult):
        api = source
    else:
        if base_dir is None:
            base_dir = caller_dir()
        api = load(source, base_dir=base_dir, extensions=settings.LOADER_EXTENSIONS)
    schema = make_executable_schema(api)
    context_getter = partial(get_context, api)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[State]:
        """Startup and shutdown logic."""
        app.state.schema = schema
        logger.info(
            "[%s] Server starting with root types %s",
            settings.ENV_MODE,
            ", ".join(api.root_types),
        )

        yield {}

        logger.info("[%s] Server stopped", settings.ENV_MODE)

    app = FastAPI(
        title=settings.APP_NAME,
        description="GraphQL API aggregated from a folder-per-type tree",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post(settings.GRAPHQL_PATH)
    async def graphql_endpoint(body: GraphQLRequest, request: Request):
        try:
            context = await context_getter(request)
        except FactoryError as exc:
            logger.exception("Context realization failed for %s '%s'", exc.kind, exc.name)
            return JSONResponse({"errors": [{"message": str(exc)}]}, status_code=500)

        result = await graphql(
            request.app.state.schema,
            body.query,
            variable_values=body.variables,
            operation_name=body.operationName,
            context_value=context,
        )
        return result.formatted

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {
            "status": "ok",
            "mode": settings.ENV_MODE,
            "version": settings.APP_VERSION,
        }

    return app
