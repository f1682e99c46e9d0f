#!/usr/bin/env python3
"""
Build a multipart/form-data upload request and print it.

    python examples/multipart_upload.py -f title=hello --file ./report.pdf
"""

import logging

import click

from formpost import MultipartBuilder, MultipartIOError, Request


@click.command()
@click.argument("url", default="https://httpbin.org/post")
@click.option("-f", "--field", "fields", multiple=True, help="Text field as name=value")
@click.option("--file", "files", multiple=True, type=click.Path(), help="File to attach")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def main(url: str, fields: tuple[str, ...], files: tuple[str, ...], verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    builder = MultipartBuilder()
    for field in fields:
        name, _, value = field.partition("=")
        builder.add_text(name, value)
    try:
        for i, path in enumerate(files):
            builder.add_file(f"file{i}", path)
        req = Request.multipart(url, builder)
    except MultipartIOError as exc:
        click.secho(f"Could not build upload: {exc}", fg="red", err=True)
        raise SystemExit(1)

    click.secho(f"{req.method} {req.url}", fg="green")
    for name, value in req.headers.items():
        print(f"{name}: {value}")
    print(f"Content-Length: {len(req.body)}")
    print()
    print(req.body.decode("utf-8", errors="replace"))


if __name__ == "__main__":
    main()
