from __future__ import annotations

import codecs
import json
from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from .compression import decode_body
from .headers import headers as make_headers

if TYPE_CHECKING:
    from .multipart import MultipartBuilder


class Method(str, Enum):
    """HTTP request methods."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"

    def __str__(self) -> str:
        return self.value


class Request:
    """
    An HTTP request ready to be handed to a transport.

    Use the `get`, `post` and `multipart` constructors for the common cases.
    """

    def __init__(
        self,
        method: Method | str,
        url: object,
        body: bytes = b"",
        headers: dict[str, str] | None = None,
    ) -> None:
        self.method = str(method).upper()
        self.url = str(url)
        self.body = body
        self.headers: dict[str, str] = headers if headers is not None else {}

    @classmethod
    def get(cls, url: object) -> Request:
        return cls(Method.GET, url, b"", make_headers([("Accept", "*/*")]))

    @classmethod
    def post(cls, url: object, body: bytes) -> Request:
        return cls(
            Method.POST,
            url,
            body,
            make_headers(
                [
                    ("Accept", "*/*"),
                    ("Content-Type", "text/plain; charset=utf-8"),
                ]
            ),
        )

    @classmethod
    def multipart(cls, url: object, builder: MultipartBuilder) -> Request:
        """Finish `builder` and wrap its body in a POST request."""
        content_type, body = builder.finish()
        return cls(
            Method.POST,
            url,
            body,
            make_headers([("Accept", "*/*"), ("Content-Type", content_type)]),
        )

    def with_method(self, method: Method | str) -> Request:
        self.method = str(method).upper()
        return self

    def __repr__(self) -> str:
        return f"<Request [{self.method}] {self.url}>"


class Response:
    """
    A completed HTTP response. Any status code, including 4xx and 5xx,
    is a response; `ok` tells whether it was a 2xx.
    """

    def __init__(
        self,
        url: str,
        status: int,
        status_text: str,
        headers: Iterable[tuple[str, str]] | dict[str, str],
        body: bytes,
    ) -> None:
        self.url = url
        self.status = status
        self.status_text = status_text
        pairs = headers.items() if isinstance(headers, dict) else headers
        # All header names are lower-case.
        self.headers: dict[str, str] = {name.lower(): value for name, value in pairs}
        self._body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def content(self) -> bytes:
        return self._body

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def text(self) -> str | None:
        """The body decoded with the declared charset (UTF-8 by default), or None."""
        encoding = "utf-8"
        ctype = self.content_type
        if ctype and "charset=" in ctype:
            encoding = ctype.split("charset=")[-1].split(";")[0].strip() or encoding
        try:
            codecs.lookup(encoding)
        except LookupError:
            encoding = "utf-8"
        try:
            return self._body.decode(encoding)
        except UnicodeDecodeError:
            return None

    def json(self) -> object:
        text = self.text
        if text is None:
            raise ValueError("Response body is not valid text")
        return json.loads(text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Response):
            return NotImplemented
        return (
            self.url == other.url
            and self.status == other.status
            and self.status_text == other.status_text
            and self.headers == other.headers
            and self._body == other._body
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<Response [{self.status}] {len(self._body)} bytes>"


class PartialResponse:
    """Status line and headers of a response whose body is still being read."""

    def __init__(
        self,
        url: str,
        status: int,
        status_text: str,
        headers: Iterable[tuple[str, str]] | dict[str, str],
    ) -> None:
        self.url = url
        self.status = status
        self.status_text = status_text
        pairs = headers.items() if isinstance(headers, dict) else headers
        self.headers: dict[str, str] = {name.lower(): value for name, value in pairs}

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def complete(self, body: bytes, decompress: bool = False) -> Response:
        """Attach the body as-is, or decoded per Content-Encoding when `decompress` is set."""
        if decompress:
            body = decode_body(body, self.headers.get("content-encoding", ""))
        return Response(self.url, self.status, self.status_text, self.headers, body)

    def __repr__(self) -> str:
        return f"<PartialResponse [{self.status}]>"
