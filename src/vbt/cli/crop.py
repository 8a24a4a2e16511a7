"""CLI command for computing crop expressions from corner points."""

from __future__ import annotations

import click

from vbt.cli.exit_codes import ExitCode
from vbt.cli.output import error_exit
from vbt.geometry import crop_from_points


@click.command("crop")
@click.argument("x1", type=float)
@click.argument("y1", type=float)
@click.argument("x2", type=float)
@click.argument("y2", type=float)
@click.option(
    "--frame-width",
    type=click.IntRange(min=1),
    required=True,
    help="Video frame width in pixels.",
)
@click.option(
    "--frame-height",
    type=click.IntRange(min=1),
    required=True,
    help="Video frame height in pixels.",
)
@click.option(
    "--square/--no-square",
    default=True,
    show_default=True,
    help="Force a square crop using the larger side.",
)
@click.option(
    "--filter",
    "as_filter",
    is_flag=True,
    default=False,
    help="Print the full 'crop=' filter instead of W:H:X:Y.",
)
def crop_command(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    frame_width: int,
    frame_height: int,
    square: bool,
    as_filter: bool,
) -> None:
    """Print the crop rectangle spanned by two points on a frame.

    The output can be pasted into the config file's crop.expr.

    Examples:

        vbt crop 420 0 1500 1080 --frame-width 1920 --frame-height 1080
    """
    try:
        rect = crop_from_points(
            (x1, y1),
            (x2, y2),
            frame_width,
            frame_height,
            enforce_square=square,
        )
    except ValueError as e:
        error_exit(str(e), ExitCode.INVALID_ARGUMENT)

    click.echo(rect.to_filter() if as_filter else rect.to_expression())
