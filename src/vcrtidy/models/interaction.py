"""
Interaction view data models.

An Interaction is a read-mostly view over one recorded request/response
exchange. Each view is given a fresh, process-unique ID when it is created;
the ID is never derived from the recorded content, so two identical
recordings remain distinguishable.

Response headers are held in a HeaderMap that wraps the caller's own header
dictionary. Mutations made through the view (only ever to ``Location``,
and only by Header Continuity Repair) therefore land directly in the record
the adapter will later persist.
"""

import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, MutableMapping, Optional, Union

from .. import urls

logger = logging.getLogger(__name__)

HeaderValues = Union[str, List[str]]


def canonical_header_key(name: str) -> str:
    """
    Return the canonical form of a header name.

    Examples:
        >>> canonical_header_key("azure-asyncoperation")
        'Azure-Asyncoperation'
    """
    return "-".join(part.capitalize() for part in name.split("-"))


class HeaderMap:
    """
    Case-insensitive access to a mapping of header name to value(s).

    The wrapped mapping may hold either a list of values per name (as go-vcr
    cassettes do) or a single string. Lookups return the first value.
    """

    def __init__(self, headers: Optional[MutableMapping[str, HeaderValues]] = None):
        self._headers = headers if headers is not None else {}

    def _matching_keys(self, name: str) -> List[str]:
        folded = name.lower()
        return [key for key in self._headers if key.lower() == folded]

    def get(self, name: str) -> Optional[str]:
        """Return the first value of the named header, or None if absent."""
        for key in self._matching_keys(name):
            values = self._headers[key]
            if isinstance(values, str):
                return values
            if values:
                return values[0]
        return None

    def set(self, name: str, value: str) -> None:
        """Replace every variant of the named header with a single value."""
        existing = self._matching_keys(name)
        list_style = not existing or not isinstance(self._headers[existing[0]], str)
        for key in existing:
            del self._headers[key]
        self._headers[canonical_header_key(name)] = [value] if list_style else value

    def remove(self, name: str) -> None:
        """Remove every variant of the named header, if present."""
        for key in self._matching_keys(name):
            del self._headers[key]

    def __contains__(self, name: str) -> bool:
        return bool(self._matching_keys(name))

    def as_dict(self) -> Dict[str, HeaderValues]:
        return dict(self._headers)


@dataclass
class Request:
    """The request half of an interaction."""

    method: str
    url: str


@dataclass
class Response:
    """The response half of an interaction."""

    status_code: int
    body: bytes = b""
    headers: HeaderMap = field(default_factory=HeaderMap)

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name)

    def set_header(self, name: str, value: str) -> None:
        self.headers.set(name, value)

    def remove_header(self, name: str) -> None:
        self.headers.remove(name)

    def json(self) -> Optional[Any]:
        """
        Parse the body as JSON.

        Returns:
            The decoded document, or None if the body is empty, not UTF-8,
            or not valid JSON.
        """
        if not self.body:
            return None
        try:
            return json.loads(self.body)
        except (ValueError, UnicodeDecodeError):
            return None


@dataclass(eq=False)
class Interaction:
    """
    One recorded request/response exchange.

    Equality is identity: two interactions are the same only if they are the
    same object (and therefore share an ID).
    """

    request: Request
    response: Response
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def full_url(self) -> str:
        return self.request.url

    @property
    def base_url(self) -> str:
        # Always derived, never stored
        return urls.base_url(self.request.url)

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def __str__(self) -> str:
        return f"{self.method:<6} {self.status_code:3d} {self.full_url}"


def _body_bytes(body: Any) -> bytes:
    if body is None:
        return b""
    if isinstance(body, bytes):
        return body
    return str(body).encode("utf-8")


def _status_code(code: Any) -> int:
    """Read a recorded status code; missing or non-numeric codes read as 0."""
    if code is None or isinstance(code, bool):
        return 0
    try:
        return int(code)
    except (TypeError, ValueError):
        logger.debug(f"Treating unreadable status code {code!r} as 0")
        return 0


def interaction_from_record(record: MutableMapping[str, Any]) -> Interaction:
    """
    Build an Interaction view over a go-vcr shaped record.

    The record's response header mapping is wrapped in place (created if
    missing), so header repairs are visible on the record afterwards.

    Args:
        record: Mapping with ``request`` (``method``, ``url``) and
                ``response`` (``code``, ``headers``, ``body``) sections

    Returns:
        A new Interaction with a fresh ID
    """
    request_data = record.get("request") or {}
    response_data = record.setdefault("response", {})
    headers = response_data.get("headers")
    if headers is None:
        headers = {}
        response_data["headers"] = headers

    return Interaction(
        request=Request(
            method=str(request_data.get("method", "")),
            url=str(request_data.get("url", "")),
        ),
        response=Response(
            status_code=_status_code(response_data.get("code")),
            body=_body_bytes(response_data.get("body")),
            headers=HeaderMap(headers),
        ),
    )
