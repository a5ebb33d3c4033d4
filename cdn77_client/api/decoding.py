"""
Response Decoding.

Turns a successful response body into the shape a command expects. A body
that does not fit is a contract mismatch between client and API, never a
user error, and is raised as DecodeError.
"""

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from cdn77_client.core.exceptions import DecodeError
from cdn77_client.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _decode(response: httpx.Response, adapter: TypeAdapter) -> Any:
    try:
        return adapter.validate_json(response.content)
    except ValidationError as e:
        log_with_source(
            logger,
            "api",
            "debug",
            "Response decoding failed",
            status_code=response.status_code,
            errors=e.error_count(),
        )
        raise DecodeError(
            f"Failed to deserialize response, e={e}",
            status_code=response.status_code,
        ) from e


def decode_model(response: httpx.Response, model: type[ModelT]) -> ModelT:
    """Decode a JSON object into `model`."""
    return _decode(response, TypeAdapter(model))


def decode_model_list(response: httpx.Response, model: type[ModelT]) -> list[ModelT]:
    """Decode a JSON array of objects into a list of `model`."""
    return _decode(response, TypeAdapter(list[model]))


def decode_json(response: httpx.Response) -> Any:
    """
    Decode any well-formed JSON value.

    Used for statistics payloads whose schema this client does not model;
    the value is validated as JSON, not against a schema.
    """
    return _decode(response, TypeAdapter(Any))
