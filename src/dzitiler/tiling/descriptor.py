"""Reading and writing ``.dzi`` descriptors."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from dzitiler.config import DZI_NAMESPACE
from dzitiler.core.errors import TilingIOError, UnsupportedSourceImage
from dzitiler.core.paths import atomic_text_save
from dzitiler.core.types import Descriptor

logger = logging.getLogger(__name__)

# Deep Zoom viewers compare against this layout, so it is emitted verbatim
# rather than through an XML serializer.
_DZI_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<Image xmlns="{namespace}"\n'
    '    TileSize="{tile_size}"\n'
    '    Overlap="{overlap}"\n'
    '    Format="{format}">\n'
    '    <Size Width="{width}" Height="{height}"/>\n'
    "</Image>"
)


def render_descriptor(descriptor: Descriptor) -> str:
    """Render the XML text of a descriptor (no trailing newline)."""
    return _DZI_TEMPLATE.format(
        namespace=DZI_NAMESPACE,
        tile_size=descriptor.tile_size,
        overlap=descriptor.overlap,
        format=descriptor.format,
        width=descriptor.width,
        height=descriptor.height,
    )


def write_descriptor(descriptor: Descriptor, path: Path) -> Path:
    """Write a descriptor to ``path``.

    Args:
        descriptor: Tile size, overlap and full-resolution size to record
        path: Destination ``.dzi`` file

    Returns:
        The path written

    Raises:
        TilingIOError: If the file cannot be written
    """
    path = Path(path)
    try:
        atomic_text_save(path, render_descriptor(descriptor))
    except OSError as e:
        raise TilingIOError(f"Failed to write descriptor {path}: {e}") from e
    logger.debug("Wrote descriptor %s", path)
    return path


def read_descriptor(path: Path) -> Descriptor:
    """Parse a ``.dzi`` file.

    Raises:
        TilingIOError: If the file cannot be read
        UnsupportedSourceImage: If the file is not a Deep Zoom descriptor
    """
    path = Path(path)
    try:
        root = ET.parse(path).getroot()
    except OSError as e:
        raise TilingIOError(f"Failed to read descriptor {path}: {e}") from e
    except ET.ParseError as e:
        raise UnsupportedSourceImage(f"Malformed descriptor {path}: {e}") from e

    ns = {"dz": DZI_NAMESPACE}
    size = root.find("dz:Size", ns)
    if root.tag != f"{{{DZI_NAMESPACE}}}Image" or size is None:
        raise UnsupportedSourceImage(f"{path} is not a Deep Zoom descriptor")

    try:
        return Descriptor(
            tile_size=int(root.attrib["TileSize"]),
            overlap=int(root.attrib["Overlap"]),
            width=int(size.attrib["Width"]),
            height=int(size.attrib["Height"]),
            format=root.attrib["Format"],
        )
    except (KeyError, ValueError) as e:
        raise UnsupportedSourceImage(f"Malformed descriptor {path}: {e}") from e
