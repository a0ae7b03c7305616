"""
Example: build a multipart/form-data body and POST it.

    python examples/upload.py photo.png --field title="Holiday" --url https://httpbin.org/post

Without --url the body is written to stdout instead.
"""

import sys
import urllib.request

import click

from formstream import CustomMimetypeResolver, MultipartStreamBuilder


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option("--field", "fields", multiple=True, help="Form field as name=value")
@click.option("--url", default=None, help="Endpoint to POST the body to")
def main(paths: tuple[str, ...], fields: tuple[str, ...], url: str | None) -> None:
    resolver = CustomMimetypeResolver({"heic": "image/heic"})
    builder = MultipartStreamBuilder(mimetype_resolver=resolver)

    for field in fields:
        name, _, value = field.partition("=")
        builder.add_named_part(name, value)

    handles = [open(path, "rb") for path in paths]
    try:
        for handle in handles:
            builder.add_named_part("file", handle)
        body = builder.build()
    finally:
        for handle in handles:
            handle.close()

    with body:
        if url is None:
            sys.stdout.buffer.write(body.getvalue())
            return
        # Any HTTP client that accepts a file object as the request body can send body.fileobj.
        request = urllib.request.Request(
            url,
            data=body.fileobj,
            method="POST",
            headers={
                "Content-Type": builder.content_type,
                "Content-Length": str(body.size),
            },
        )
        with urllib.request.urlopen(request) as response:
            click.secho(f"Upload status: {response.status}", fg="green")


if __name__ == "__main__":
    main()
