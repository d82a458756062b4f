"""
Decodes raw JSON payloads into the typed response models.
"""

import json
import logging
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from lastfm_client.exceptions import DecodeError, LastFmApiError

log = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

ROOT_PATH = "<root>"


def _format_loc(loc: tuple[Union[int, str], ...]) -> str:
    return ".".join(str(part) for part in loc) if loc else ROOT_PATH


def validate(schema: type[SchemaT], raw: Any) -> SchemaT:
    """
    Validates a payload against a response schema.

    Args:
        schema: The operation's response model.
        raw: The parsed JSON value, or the JSON document as text/bytes.

    Returns:
        A fully validated, immutable instance of ``schema``.

    Raises:
        DecodeError: If the payload does not match; carries the offending field path.
    """
    try:
        if isinstance(raw, (str, bytes, bytearray)):
            return schema.model_validate_json(raw)
        return schema.model_validate(raw)
    except ValidationError as e:
        errors = [(_format_loc(err["loc"]), err["msg"]) for err in e.errors()]
        path, expectation = errors[0]
        log.debug(
            f"{schema.__name__} rejected the payload with {len(errors)} error(s), "
            f"first at '{path}': {expectation}"
        )
        raise DecodeError(path, expectation, errors) from e


def parse_payload(body: str) -> Any:
    """Parses a response body as JSON, reporting malformed documents as DecodeError."""
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise DecodeError(ROOT_PATH, f"expected a JSON document ({e.msg})") from e


def extract_error_envelope(data: Any) -> Optional[tuple[int, str]]:
    """Returns (code, message) if ``data`` is the service's error envelope."""
    if isinstance(data, dict) and "error" in data:
        code = data["error"]
        message = data.get("message", f"Error {code}")
        try:
            return int(code), str(message)
        except (TypeError, ValueError):
            return None
    return None


def raise_for_error_envelope(data: Any) -> None:
    """
    Raises LastFmApiError when a successful response carries an error envelope.
    """
    envelope = extract_error_envelope(data)
    if envelope is not None:
        code, message = envelope
        raise LastFmApiError(code, message)
