"""
Package descriptor loading.

Reads description.json from a package root, rejects anything that is not a
'Blocks and Parts' mod, and builds a Package with an empty definition
index. The game's JSON files routinely carry // and /* */ comments, so
everything is decoded with json5.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

import json5

from shapeindex.mods.errors import (
    DescriptorParseError,
    DescriptorReadError,
    UnsupportedPackageTypeError,
)
from shapeindex.mods.models import (
    DEFAULT_PREVIEW,
    DESCRIPTOR_FILENAME,
    PREVIEW_EXTENSIONS,
    SUPPORTED_PACKAGE_TYPE,
    Descriptor,
    Package,
)

logger = logging.getLogger(__name__)


def read_json5(path: Path) -> Any:
    """Decode a JSON file that may contain comments. Raises OSError or ValueError."""
    with open(path, "r", encoding="utf-8-sig") as f:
        text = f.read()

    # json5 parses recursively and gives up on deeply nested documents
    try:
        return json5.loads(text)
    except RecursionError as e:
        raise ValueError(f"document nested too deeply: {e}") from e


def descriptor_path(directory: Path) -> Path:
    return Path(directory) / DESCRIPTOR_FILENAME


def has_descriptor(directory: Path) -> bool:
    return descriptor_path(directory).is_file()


def read_descriptor(directory: Path) -> Descriptor:
    """
    Read and validate the descriptor of the package at ``directory``.

    Raises:
        DescriptorReadError: file missing or unreadable
        DescriptorParseError: not valid JSON, not an object, or no localId
        UnsupportedPackageTypeError: type is not 'Blocks and Parts'
    """
    path = descriptor_path(directory)

    try:
        data = read_json5(path)
    except OSError as e:
        raise DescriptorReadError(path, e.strerror or str(e)) from e
    except ValueError as e:
        raise DescriptorParseError(path, str(e)) from e

    if not isinstance(data, dict):
        raise DescriptorParseError(path, f"expected an object, got {type(data).__name__}")

    if data.get("type") != SUPPORTED_PACKAGE_TYPE:
        raise UnsupportedPackageTypeError(path, data.get("type"))

    if not isinstance(data.get("localId"), str) or not data["localId"]:
        raise DescriptorParseError(path, "missing localId")

    logger.debug("Read descriptor %s (%s)", data["localId"], path)
    return Descriptor.from_dict(data)


def find_preview(directory: Path, expand: Optional[Callable[[str], str]] = None) -> Path:
    """
    First preview.<ext> found in the package root, else the game's example
    mod preview (expanded through ``expand`` when given).
    """
    directory = Path(directory)
    for ext in PREVIEW_EXTENSIONS:
        candidate = directory / f"preview.{ext}"
        if candidate.is_file():
            return candidate

    default = DEFAULT_PREVIEW
    if expand is not None:
        default = expand(default)
    return Path(default)


def make_package(
    directory: Path,
    descriptor: Descriptor,
    is_synthetic: bool = False,
    expand: Optional[Callable[[str], str]] = None,
) -> Package:
    """Build a Package from an already validated descriptor."""
    if descriptor.type != SUPPORTED_PACKAGE_TYPE:
        raise UnsupportedPackageTypeError(Path(directory), descriptor.type)

    return Package(
        directory=Path(directory),
        descriptor=descriptor,
        is_synthetic=is_synthetic,
        preview_path=find_preview(directory, expand),
    )


def load_package(directory: Path, expand: Optional[Callable[[str], str]] = None) -> Package:
    """
    Load the package rooted at ``directory``.

    Only the descriptor is read; call parse_shapesets() to fill in
    ``definitions``.
    """
    descriptor = read_descriptor(directory)
    return make_package(directory, descriptor, expand=expand)
