"""stafflines CLI entry point."""

import json
import logging
import sys

import click

from stafflines import __version__
from stafflines.image_loader import load_pixel_grid
from stafflines.line_detector import classify_row_values, dark_row_threshold
from stafflines.row_profiler import profile_rows
from stafflines.staff_detector import DetectionResult, detect


def _result_to_dict(image: str, result: DetectionResult) -> dict:
    """Plain-data view of a DetectionResult for JSON output."""
    return {
        "image": image,
        "rows": len(result.row_values),
        "threshold": result.threshold,
        "lines": [
            {"start": segment.start, "thickness": segment.thickness}
            for segment in result.segments
        ],
        "staves": [
            {
                "top": staff.top,
                "bottom": staff.bottom,
                "lines": [list(line) for line in staff.lines],
            }
            for staff in result.staves
        ],
    }


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="stafflines")
def main() -> None:
    """stafflines: horizontal staff line detection for scanned sheet music."""


invert_option = click.option(
    "--invert",
    is_flag=True,
    default=False,
    help="Invert intensities first (for light ink on a dark background).",
)


# ── detect subcommand ──────────────────────────────────────────────────────────

@main.command("detect")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, readable=True))
@invert_option
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print a single JSON document instead of the text report.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output to stderr.")
def detect_command(image: str, invert: bool, as_json: bool, verbose: bool) -> None:
    """
    Find staff lines and regular five-line staves in an image.

    IMAGE is a scanned page in any format Pillow can read.

    \b
    Examples:
      stafflines detect page.png
      stafflines detect page.png --json > page.json
      stafflines detect negative.tif --invert -v
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        pixels = load_pixel_grid(image, invert=invert)
        result = detect(pixels)
    except (OSError, ValueError) as exc:
        click.echo(f"  ERROR: Could not analyse image: {exc}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(_result_to_dict(image, result), indent=2))
        return

    click.echo(f"stafflines v{__version__}")
    click.echo(f"  Image     : {image}")
    click.echo(f"  Rows      : {len(result.row_values)}")
    click.echo(f"  Threshold : {result.threshold:.2f}")
    click.echo()

    click.echo(f"Detected {len(result.segments)} line(s):")
    for segment in result.segments:
        click.echo(f"  row {segment.start:6d}  thickness {segment.thickness}")

    click.echo()
    if not result.staves:
        click.echo("No regular staff found.")
        return

    click.echo(f"Detected {len(result.staves)} staff/staves:")
    for number, staff in enumerate(result.staves, start=1):
        starts = ", ".join(str(line.start) for line in staff.lines)
        click.echo(f"  {number:3d}. rows {staff.top}-{staff.bottom}  lines at {starts}")


# ── profile subcommand ─────────────────────────────────────────────────────────

@main.command("profile")
@click.argument("image", type=click.Path(exists=True, dir_okay=False, readable=True))
@invert_option
def profile_command(image: str, invert: bool) -> None:
    """
    Print the mean intensity of every row of IMAGE, marking dark rows with '#'.

    \b
    Examples:
      stafflines profile page.png | less
    """
    try:
        row_values = profile_rows(load_pixel_grid(image, invert=invert))
        threshold = dark_row_threshold(row_values)
    except (OSError, ValueError) as exc:
        click.echo(f"  ERROR: Could not profile image: {exc}", err=True)
        sys.exit(1)

    mask = classify_row_values(row_values, threshold)
    for index, (value, is_dark) in enumerate(zip(row_values, mask)):
        marker = "#" if is_dark else ""
        click.echo(f"{index:6d}  {value:8.2f}  {marker}".rstrip())
