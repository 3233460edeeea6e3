import logging
from typing import List, Optional

import typer

from romlayout import BuildArgs, LayoutError, load_layout, run

app = typer.Typer(add_completion=False, help="flash layout: show layouts, build partial images.")


def _fail(e: Exception):
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="more output, repeat for debug"),
):
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


@app.command()
def show(
    layout: List[str] = typer.Argument(..., help="layout file(s)"),
    include: Optional[List[str]] = typer.Option(None, "--include", "-i", help="region[:file]"),
):
    """Print the regions of a layout."""
    try:
        session = load_layout(layout, include or [])
    except (LayoutError, OSError) as e:
        _fail(e)

    for region in session:
        line = str(region)
        if region.included:
            line += " [included]"
        if region.override_file is not None:
            line += f" <- {region.override_file}"
        print(line)


@app.command()
def build(
    layout: List[str] = typer.Option(..., "--layout", "-l", help="layout file(s)"),
    include: Optional[List[str]] = typer.Option(None, "--include", "-i", help="region[:file]"),
    new: str = typer.Option(..., "--new", "-n", help="desired image"),
    out: str = typer.Option(..., "--out", "-o", help="where to write the final image"),
    old: Optional[str] = typer.Option(None, "--old", help="dump of the current chip content"),
    chip_size: Optional[str] = typer.Option(None, "--chip-size", help="chip size in bytes (0x.. ok)"),
    chunk: int = typer.Option(64 * 1024, help="read chunk size"),
    progress: bool = typer.Option(True, help="show read progress"),
):
    """Merge a new image with the current chip content for the included regions."""
    try:
        size = None if chip_size is None else int(chip_size, 0)
    except ValueError:
        _fail(ValueError(f"bad chip size {chip_size!r}"))

    args = BuildArgs(
        layouts=layout,
        new=new,
        out=out,
        includes=include or [],
        old=old,
        chip_size=size,
        chunk_size=chunk,
        progress=progress,
    )
    try:
        run(args)
    except (LayoutError, OSError) as e:
        _fail(e)


if __name__ == "__main__":
    app()
