"""
handlers/http.py
----------------
The request/response envelope shared by every endpoint handler.

Handlers are plain functions `handler(request, ...) -> Response` so they can
be called directly from tests or mounted on any web framework (see main.py).
The `endpoint` decorator owns verb checking, error mapping and headers.
"""

from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Iterable, Optional, TypeVar

import pydantic

from handlers.errors import HandlerError, MethodNotAllowedError, RateLimitError
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}

BodyT = TypeVar("BodyT", bound=pydantic.BaseModel)


@dataclass
class Request:
    """An inbound HTTP request, reduced to what handlers need."""
    method: str
    query: dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    client: Optional[str] = None

    def param(self, name: str) -> Optional[str]:
        """Query-string value, or None when absent or blank."""
        value = self.query.get(name)
        if value is None or not str(value).strip():
            return None
        return value

    def parse(self, schema: type[BodyT]) -> BodyT:
        """
        Decode and validate the body against a pydantic schema.
        An empty body counts as ``{}``.

        Raises:
            pydantic.ValidationError: On malformed JSON, a non-object body,
                wrong field types or missing required fields.
        """
        return schema.model_validate_json(self.body or "{}")


@dataclass
class Response:
    status_code: int
    body: Any
    headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))


def json_response(status_code: int, body: Any, **extra_headers: str) -> Response:
    headers = dict(DEFAULT_HEADERS)
    headers.update(extra_headers)
    return Response(status_code=status_code, body=body, headers=headers)


def error_response(status_code: int, message: str, **extra_headers: str) -> Response:
    return json_response(status_code, {"error": message}, **extra_headers)


def describe_invalid(error: pydantic.ValidationError, missing: str) -> str:
    """
    One-line client message for a failed body validation.

    Missing required fields collapse to the endpoint's `missing` message;
    otherwise the first offending field is named, e.g.
    ``"title: Input should be a valid string"``.
    """
    errors = error.errors(include_url=False)
    if any(e["type"] == "missing" for e in errors):
        return missing
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def endpoint(
    failure: str,
    methods: Optional[Iterable[str]] = None,
    missing: str = "Missing required fields",
) -> Callable:
    """
    Decorator turning a handler body into a complete endpoint.

    Usage:
        @endpoint(methods=["POST"], failure="Failed to create idea")
        def create_idea(request, ideas):
            ...

    Behavior:
        - Verbs outside `methods` get 405 before the handler runs.
        - HandlerError subclasses become their status and message.
        - pydantic validation errors become 400; `missing` is the message
          when a required field is absent.
        - Any other exception is logged with its traceback and reported as
          500 with the `failure` message; the cause is never sent to the client.
    """
    allowed = {m.upper() for m in methods} if methods else None

    def decorator(func: Callable[..., Response]) -> Callable[..., Response]:
        @wraps(func)
        def wrapper(request: Request, *args, **kwargs) -> Response:
            try:
                if allowed is not None and request.method.upper() not in allowed:
                    raise MethodNotAllowedError()
                return func(request, *args, **kwargs)
            except RateLimitError as e:
                return error_response(e.status_code, e.message, **{"Retry-After": str(e.retry_after)})
            except HandlerError as e:
                return error_response(e.status_code, e.message)
            except pydantic.ValidationError as e:
                message = describe_invalid(e, missing)
                logger.info(f"{func.__name__}: rejected body ({message})")
                return error_response(400, message)
            except Exception:
                logger.exception(f"{func.__name__}: {failure}")
                return error_response(500, failure)

        return wrapper

    return decorator
