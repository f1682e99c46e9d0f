#!/usr/bin/env python3
"""
Completing a streamed response with automatic content decoding.

A transport reads the status line and headers first, then the body; the
body can be decoded according to its Content-Encoding when completed.
"""

import gzip

import brotli

from formpost import PartialResponse


def main() -> None:
    payload = b'{"uploaded": true}'

    for encoding, raw in [
        ("identity", payload),
        ("gzip", gzip.compress(payload)),
        ("br", brotli.compress(payload)),
    ]:
        partial = PartialResponse(
            "https://example.com/upload",
            200,
            "OK",
            [("Content-Type", "application/json"), ("Content-Encoding", encoding)],
        )
        resp = partial.complete(raw, decompress=True)
        print(f"{encoding:>8}: {len(raw):3d} raw bytes -> ok={resp.ok} json={resp.json()}")


if __name__ == "__main__":
    main()
