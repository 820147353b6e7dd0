"""Root Typer application for nginx-server-manager."""

from __future__ import annotations

import logging

import typer

from nsm.commands import server

app = typer.Typer(
    name="nsm",
    help="Nginx Server Manager — add server blocks to an existing nginx configuration.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


app.command(name="add")(server.add)
app.command(name="preview")(server.preview_cmd)
app.command(name="render")(server.render)
app.command(name="detect")(server.detect)

if __name__ == "__main__":
    app()
