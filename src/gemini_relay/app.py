"""Gemini Relay - FastAPI application.

Four endpoints, one upstream. Each request is validated, forwarded once,
and whatever comes back is squeezed into a {code, reply} envelope.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logfire

from .config import PORT
from .protocol import Envelope
from .router import init_routes, get_route
from . import proxy

# Suppress harmless OTel context warnings before they're configured
logging.getLogger("opentelemetry.context").setLevel(logging.CRITICAL)

# Only ships spans when a LOGFIRE_TOKEN is present; console output otherwise
logfire.configure(send_to_logfire="if-token-present", scrubbing=False)
logfire.instrument_httpx()

init_routes()

ALL_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    logfire.info(f"Server running on http://localhost:{PORT}")
    yield
    logfire.info("Gemini Relay is shutting down...")
    await proxy.close()


app = FastAPI(
    title="Gemini Relay",
    description="Forwards prompts to an inference API and normalises the reply.",
    lifespan=lifespan,
    # Only /health and the route table are served
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# Instrument FastAPI
logfire.instrument_fastapi(app)


def envelope_response(envelope: Envelope, status_code: int = 200) -> JSONResponse:
    return JSONResponse(envelope.to_dict(), status_code=status_code)


def raw_path(request: Request) -> str:
    """The request path as sent, percent-escapes left intact."""
    raw = request.scope.get("raw_path")
    if raw is None:
        return request.scope["path"]
    return raw.partition(b"?")[0].decode("latin-1")


def first_values(request: Request) -> dict[str, str]:
    """Query parameters, keeping the first value when a name repeats."""
    query = {}
    for name, value in request.query_params.multi_items():
        query.setdefault(name, value)
    return query


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "gemini-relay"}


@app.api_route("/{path:path}", methods=ALL_METHODS)
async def handle_request(request: Request, path: str):
    """Dispatch on the exact path, validate, and forward upstream."""
    sent_path = raw_path(request)
    route = get_route(sent_path)
    if route is None:
        logfire.info("No route", method=request.method, path=sent_path)
        return envelope_response(Envelope.not_found(), status_code=404)

    query = first_values(request)
    if route.missing(query):
        logfire.info("Missing parameters", path=route.path, given=sorted(query))
        return envelope_response(Envelope.bad_request(route.missing_reply), status_code=400)

    envelope = await proxy.fetch_and_format_response(
        route.upstream_path,
        route.upstream_params(query),
    )
    logfire.info(
        f"{route.path} -> {route.upstream_path}: {envelope.code}",
        path=route.path,
        code=envelope.code,
    )

    # Upstream failures are reported in the body only; HTTP status stays 200
    return envelope_response(envelope)
