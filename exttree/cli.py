"""Count files and bytes per extension in each directory of a tree, drawn like `tree`."""
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from .errors import InvalidConfig, RootUnreadable
from .models import ScanConfig, SortMode
from .render import render
from .scanner import aggregate

logger = logging.getLogger("exttree")

UNBOUNDED = -1


def setup_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def build_config(sort: str, depth: int, empty: bool,
                 ignore_case: bool = False, follow_symlinks: bool = False) -> ScanConfig:
    return ScanConfig(
        max_depth=None if depth == UNBOUNDED else depth,
        show_empty=empty,
        sort_mode=SortMode.parse(sort),
        fold_case=ignore_case,
        follow_symlinks=follow_symlinks,
    )


app = typer.Typer(
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
)


@app.command(help=__doc__)
def main(
    directory: Annotated[Path, typer.Argument(help="Root directory for extension count.")],
    sort: Annotated[str, typer.Option(
        "--sort", "-s", help="alphabetically, file-count or file-size.")] = SortMode.FILE_SIZE.value,
    depth: Annotated[int, typer.Option(
        "--depth", "-d", help="Directory levels to expand below the root (-1 = unbounded).")] = 0,
    empty: Annotated[bool, typer.Option("--empty", "-e", help="Print empty directories.")] = False,
    ignore_case: Annotated[bool, typer.Option(
        "--ignore-case", "-i", help="Group extensions case-insensitively (JPG = jpg).")] = False,
    follow_symlinks: Annotated[bool, typer.Option(
        "--follow-symlinks", "-L", help="Follow symbolic links.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log skipped entries to stderr.")] = False,
) -> None:
    setup_logging(verbose)
    try:
        config = build_config(sort, depth, empty, ignore_case, follow_symlinks)
    except InvalidConfig as e:
        raise typer.BadParameter(str(e)) from e

    try:
        tree = aggregate(str(directory), config)
    except RootUnreadable as e:
        logger.debug("scan aborted", exc_info=e.cause)
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(render(tree, config), nl=False)


if __name__ == "__main__":
    app()
