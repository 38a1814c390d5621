"""
Collapse every backend outcome into a typed value or an ErrorResponse.

Rules, in order:
1. No response at all                -> InternalError
2. 2xx, body parses as expected      -> the parsed value
   2xx, body does not parse          -> InternalError
3. non-2xx, body is an ErrorResponse -> that ErrorResponse, verbatim
   non-2xx, body does not parse      -> InternalError

Callers therefore never see a third shape, and never a parse exception.
"""

import functools
from typing import Any, Optional, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from meter_access.logging import get_access_logger
from meter_access.models import ErrorResponse, internal_error

from .errors import MalformedResponseError, ProtocolError

T = TypeVar("T")


@functools.lru_cache(maxsize=64)
def _adapter(expected: Any) -> TypeAdapter:
    return TypeAdapter(expected)


def _route(response: httpx.Response) -> str:
    try:
        return response.request.url.path
    except RuntimeError:
        return "<unknown>"


def _type_name(expected: Any) -> str:
    return getattr(expected, "__name__", repr(expected))


def parse(response: httpx.Response, expected: Optional[type[T]]) -> Optional[T]:
    """
    Parse a response, raising on anything that is not a success value.

    `expected=None` marks endpoints that answer with an empty body; their
    success value is None whatever the body holds.

    Raises:
        ProtocolError: non-2xx with a well-formed ErrorResponse body
        MalformedResponseError: any body that fails to parse
    """
    logger = get_access_logger()

    if response.is_success:
        if expected is None:
            return None
        try:
            return _adapter(expected).validate_json(response.content)
        except ValidationError:
            logger.log_malformed_response(
                route=_route(response),
                status_code=response.status_code,
                expected=_type_name(expected),
            )
            raise MalformedResponseError(response.status_code, _type_name(expected))

    try:
        error = ErrorResponse.model_validate_json(response.content)
    except ValidationError:
        logger.log_malformed_response(
            route=_route(response),
            status_code=response.status_code,
            expected="ErrorResponse",
        )
        raise MalformedResponseError(response.status_code, "ErrorResponse")

    logger.log_protocol_error(
        route=_route(response),
        status_code=response.status_code,
        code=error.code,
    )
    raise ProtocolError(response.status_code, error)


def normalize(
    response: Optional[httpx.Response],
    expected: Optional[type[T]],
) -> Union[T, ErrorResponse, None]:
    """Parse a response (or its absence) into `expected` or an ErrorResponse."""
    if response is None:
        return internal_error()
    try:
        return parse(response, expected)
    except ProtocolError as e:
        return e.error
    except MalformedResponseError:
        return internal_error()
