"""
FastAPI application exposing the Request Dispatcher over HTTP.

    OPTIONS *   -> 200, empty body (CORS pre-flight)
    POST *      -> {"query": "..."} or {"bggIds": [...]}
    GET /health -> service status
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from ..config import CORS_HEADERS, RESOLVER_BACKEND
from ..resolvers import GameResolver, build_resolver
from .dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)


def create_app(resolver: Optional[GameResolver] = None, backend: str = RESOLVER_BACKEND) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        resolver: Lookup strategy to serve; built from ``backend`` at startup when omitted
        backend: Backend name passed to ``build_resolver``
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A misconfigured backend fails here, before any request is served
        if getattr(app.state, "dispatcher", None) is None:
            app.state.dispatcher = RequestDispatcher(build_resolver(backend))
        logger.info(f"Board game lookup API ready ({app.state.dispatcher.resolver.name} backend)")
        yield
        logger.info("Shutting down board game lookup API")

    app = FastAPI(
        title="Board Game Lookup API",
        description="Search BoardGameGeek and return normalized board game records",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.dispatcher = RequestDispatcher(resolver) if resolver is not None else None

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.get("/health")
    async def health_check():
        dispatcher = app.state.dispatcher
        return {
            "status": "healthy",
            "backend": dispatcher.resolver.name if dispatcher else None,
        }

    @app.api_route("/{path:path}", methods=["POST", "OPTIONS"])
    async def lookup(request: Request):
        raw_body = await request.body()
        result = await run_in_threadpool(app.state.dispatcher.handle, request.method, raw_body)
        if result.body is None:
            return Response(status_code=result.status_code)
        return JSONResponse(result.body, status_code=result.status_code)

    return app


app = create_app()
