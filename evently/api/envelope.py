"""Response envelope: wraps every successful JSON result as ``{data, meta}``."""

import json
from collections.abc import Callable, Coroutine
from datetime import UTC, datetime
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from evently.schemas.common import Envelope, Meta, isoformat_utc

# Recomputed by JSONResponse for the new body
_RECOMPUTED_HEADERS = {"content-length", "content-type"}


def is_json_response(response: Response) -> bool:
    """True for any buffered JSON body, whichever Response class rendered it."""
    content_type = response.headers.get("content-type", "")
    return content_type.startswith("application/json") and isinstance(
        getattr(response, "body", None), bytes
    )


def build_meta(request: Request) -> Meta:
    """Metadata for the response being built right now."""
    return Meta(
        correlation_id=getattr(request.state, "correlation_id", None),
        timestamp=isoformat_utc(datetime.now(UTC)),
    )


def wrap_response(request: Request, response: Response) -> JSONResponse:
    """Re-render a handler's JSON response inside the envelope."""
    data = json.loads(response.body) if response.body else None
    envelope = Envelope(data=data, meta=build_meta(request))

    wrapped = JSONResponse(
        status_code=response.status_code,
        content=envelope.model_dump(by_alias=True),
        background=response.background,
    )
    for key, value in response.headers.items():
        if key not in _RECOMPUTED_HEADERS:
            wrapped.headers.append(key, value)
    return wrapped


class EnvelopeRoute(APIRoute):
    """Route class applying the envelope after the handler and its response model ran."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        route_handler = super().get_route_handler()

        async def envelope_route_handler(request: Request) -> Response:
            response = await route_handler(request)
            if response.status_code >= 400 or not is_json_response(response):
                return response
            return wrap_response(request, response)

        return envelope_route_handler
