"""CLI entry point for dzitiler."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from tqdm import tqdm

from dzitiler.config import (
    DEFAULT_TILE_OVERLAP,
    DEFAULT_TILE_SIZE,
    IMAGE_EXTENSIONS,
    JPEG_QUALITY,
)

from .worker import process_single_image

logger = logging.getLogger(__name__)


def is_image_file(path: Path) -> bool:
    """Check if a file has a supported image extension."""
    return path.suffix.lower() in IMAGE_EXTENSIONS


def find_image_files(path: Path) -> list[Path]:
    """Find source images in a path (file or directory).

    A file is returned as-is, whatever its extension, since the codec detects
    the format from its contents. Directories are scanned non-recursively.
    """
    path = Path(path)
    if path.is_file():
        return [path]
    elif path.is_dir():
        # Use set to avoid duplicates on case-insensitive filesystems (Windows)
        files = set()
        for ext in IMAGE_EXTENSIONS:
            files.update(path.glob(f"*{ext}"))
            files.update(path.glob(f"*{ext.upper()}"))
        return sorted(f for f in files if f.is_file())
    return []


def _print_header(
    image_files: list[Path], tile_size: int, tile_overlap: int, quality: int
) -> None:
    """Print the CLI banner with tiling parameters."""
    click.echo(click.style("Deep Zoom Tiling", fg="cyan", bold=True))
    click.echo(click.style("=" * 40, fg="cyan"))
    click.echo(f"Found {len(image_files)} image(s)")
    click.echo(f"Tile size: {tile_size}px | Overlap: {tile_overlap}px | JPEG Q{quality}")
    click.echo()


def _process_images(
    image_files: list[Path],
    tile_size: int,
    tile_overlap: int,
    quality: int,
) -> tuple[int, list[tuple[Path, str]]]:
    """Tile each image in turn, reporting per-tile progress.

    Returns:
        Tuple of (success_count, errors)
    """
    success_count = 0
    errors: list[tuple[Path, str]] = []

    for image_path in image_files:
        with tqdm(desc=image_path.name, unit="tile", leave=False) as pbar:

            def _on_progress(stage: str, current: int, total: int) -> None:
                if stage != "tiles":
                    return
                if pbar.total != total:
                    pbar.reset(total=total)
                pbar.n = current
                pbar.refresh()

            dzi_path, error = process_single_image(
                image_path, tile_size, tile_overlap, quality, _on_progress
            )

        if error:
            errors.append((image_path, error))
            click.echo(f"Error processing {image_path.name}: {error}", err=True)
        else:
            success_count += 1
            click.echo(f"{image_path.name} -> {dzi_path}")

    return success_count, errors


def _print_summary(success_count: int, errors: list[tuple[Path, str]]) -> None:
    """Print the colored summary and exit with error if any failures."""
    click.echo()
    click.echo(click.style("=" * 40, fg="cyan"))

    parts = []
    if success_count > 0:
        parts.append(click.style(f"{success_count} tiled", fg="green"))
    if errors:
        parts.append(click.style(f"{len(errors)} failed", fg="red"))

    summary = ", ".join(parts) if parts else "Nothing to process"
    click.echo(click.style("Completed: ", bold=True) + summary)

    if errors:
        click.echo()
        click.echo(click.style("Failed images:", fg="red"))
        for path, error in errors:
            click.echo(f"  {path.name}: {error}")
        sys.exit(1)


@click.command()
@click.argument("input_path", type=click.Path(exists=True))
@click.option(
    "--tile-size",
    "-t",
    type=click.IntRange(min=1),
    default=DEFAULT_TILE_SIZE,
    show_default=True,
    help="Tile size in pixels",
)
@click.option(
    "--overlap",
    type=click.IntRange(min=0),
    default=DEFAULT_TILE_OVERLAP,
    show_default=True,
    help="Pixels shared between neighbouring tiles",
)
@click.option(
    "--quality",
    "-q",
    type=click.IntRange(1, 100),
    default=JPEG_QUALITY,
    show_default=True,
    help="JPEG quality of the tiles",
)
@click.option("--verbose", "-v", is_flag=True, help="Log each pyramid level")
def main(
    input_path: str,
    tile_size: int,
    overlap: int,
    quality: int,
    verbose: bool,
) -> None:
    """Convert images into Deep Zoom (.dzi) tile pyramids.

    INPUT_PATH can be a single image or a directory of images. Each image
    gets its own ``<name>.dzi`` descriptor and ``<name>_files/`` tile
    directory next to it.

    Examples:

        # Tile a single image
        python -m dzitiler photo.jpg

        # Tile every image in a directory with 510px tiles
        python -m dzitiler ./scans/ -t 510
    """
    if verbose:
        logging.basicConfig(
            level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )

    if overlap > tile_size:
        raise click.BadParameter(
            f"overlap ({overlap}) must not exceed tile size ({tile_size})",
            param_hint="'--overlap'",
        )

    input_path = Path(input_path)
    image_files = find_image_files(input_path)
    if not image_files:
        click.echo(f"No images found in {input_path}", err=True)
        sys.exit(1)

    _print_header(image_files, tile_size, overlap, quality)
    success, errors = _process_images(image_files, tile_size, overlap, quality)
    _print_summary(success, errors)


if __name__ == "__main__":
    main()
