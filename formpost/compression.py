"""
Content decoding for completed response bodies.

Supports gzip, deflate, and brotli (br) encodings.
"""

from __future__ import annotations

import gzip
import io
import zlib

import brotli


def decode_body(body: bytes, content_encoding: str) -> bytes:
    """
    Decode a response body based on its Content-Encoding header.

    Args:
        body: Raw response body bytes
        content_encoding: Value of Content-Encoding header

    Returns:
        Decoded body bytes, or the input unchanged when it cannot be decoded
    """
    if not content_encoding or not body:
        return body

    # Stacked encodings ("gzip, br") were applied left to right
    encodings = [e.strip() for e in content_encoding.lower().split(",")]

    result = body
    for enc in reversed(encodings):
        result = _decode_single(result, enc)
    return result


def _decode_single(body: bytes, encoding: str) -> bytes:
    if encoding == "gzip":
        try:
            with gzip.GzipFile(fileobj=io.BytesIO(body)) as f:
                return f.read()
        except (OSError, EOFError, zlib.error):
            return body

    if encoding == "deflate":
        try:
            # raw deflate first, then zlib-wrapped
            return zlib.decompress(body, -zlib.MAX_WBITS)
        except zlib.error:
            try:
                return zlib.decompress(body)
            except zlib.error:
                return body

    if encoding == "br":
        try:
            return brotli.decompress(body)
        except brotli.error:
            return body

    # identity and unknown encodings
    return body
