"""
ShapeSets tree parsing.

Walks a package's Objects/Database/ShapeSets directory (recursively) and
indexes every block/part entry by uuid into ``package.definitions``.

Unlike package discovery, a broken shapeset file is fatal for the parse
call: silently skipping it would under-report the package's shapes.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from shapeindex.mods.descriptor import read_json5
from shapeindex.mods.errors import (
    DefinitionFileParseError,
    DefinitionsDirectoryMissingError,
    DefinitionsDirectoryReadError,
    DefinitionTreeTooDeepError,
)
from shapeindex.mods.models import Definition, Package, ShapeCategory

logger = logging.getLogger(__name__)


SHAPESET_EXTENSION = ".json"

# Top-level list name -> category of the entries it holds
SHAPE_LISTS: Dict[str, ShapeCategory] = {
    "blockList": ShapeCategory.BLOCK,
    "partList": ShapeCategory.PART,
}

DEFAULT_MAX_DEPTH = 64


def parse_shapesets(
    package: Package,
    shapesets_dir: Optional[Path] = None,
    lists: Optional[Dict[str, ShapeCategory]] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> int:
    """
    Index every shapeset file under ``shapesets_dir`` into ``package``.

    Args:
        package: Package whose ``definitions`` are filled in
        shapesets_dir: Directory to walk (default: the package's ShapeSets dir)
        lists: Mapping of list names to categories (default: SHAPE_LISTS)
        max_depth: Maximum directory nesting below ``shapesets_dir``

    Returns:
        Total number of definitions in the package after this call

    Raises:
        DefinitionsDirectoryMissingError: ``shapesets_dir`` does not exist
        DefinitionFileParseError: a shapeset file could not be decoded
        DefinitionTreeTooDeepError: nesting exceeds ``max_depth``
    """
    if shapesets_dir is None:
        shapesets_dir = package.shapesets_dir
    shapesets_dir = Path(shapesets_dir)

    if not shapesets_dir.is_dir():
        raise DefinitionsDirectoryMissingError(shapesets_dir)

    _walk(package, shapesets_dir, lists or SHAPE_LISTS, 0, max_depth)
    return len(package.definitions)


def _walk(package: Package, directory: Path, lists: Dict[str, ShapeCategory],
          depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise DefinitionTreeTooDeepError(directory, max_depth)

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise DefinitionsDirectoryReadError(directory, e.strerror or str(e)) from e

    for entry in entries:
        if entry.is_dir():
            _walk(package, entry, lists, depth + 1, max_depth)
        elif entry.suffix.lower() == SHAPESET_EXTENSION:
            index_shapeset_file(package, entry, lists)


def index_shapeset_file(package: Package, path: Path,
                        lists: Optional[Dict[str, ShapeCategory]] = None) -> int:
    """Index a single shapeset file. Returns the number of entries it held."""
    try:
        document = read_json5(path)
    except (OSError, ValueError) as e:
        logger.error("Failed parsing shapesets file %s", path)
        raise DefinitionFileParseError(path, str(e)) from e

    if not isinstance(document, dict):
        raise DefinitionFileParseError(path, f"expected an object, got {type(document).__name__}")

    count = 0
    for list_name, category in (lists or SHAPE_LISTS).items():
        entries = document.get(list_name)
        if not entries:
            continue
        if not isinstance(entries, list):
            raise DefinitionFileParseError(path, f"{list_name} is not a list")

        for shape in entries:
            uuid = shape.get("uuid") if isinstance(shape, dict) else None
            if not isinstance(uuid, str):
                raise DefinitionFileParseError(path, f"{list_name} entry without a uuid")

            package.definitions[uuid] = Definition(
                category=category,
                uuid=uuid,
                owner_local_id=package.local_id,
                payload=shape,
            )
            count += 1

    logger.debug("Indexed %d shapes from %s", count, path)
    return count
