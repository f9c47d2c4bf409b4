"""
shapeindex.mods - Mod package discovery and shape indexing

- descriptor: read description.json and build Package objects
- shapesets: walk ShapeSets trees and index shape definitions by uuid
- registry: PackageRegistry combining vanilla, local and workshop mods
"""

from shapeindex.mods.errors import (
    ShapeIndexError,
    DescriptorReadError,
    DescriptorParseError,
    UnsupportedPackageTypeError,
    DefinitionsDirectoryMissingError,
    DefinitionsDirectoryReadError,
    DefinitionFileParseError,
    DefinitionTreeTooDeepError,
    InstallationNotConfiguredError,
)
from shapeindex.mods.models import (
    SUPPORTED_PACKAGE_TYPE,
    ShapeCategory,
    Descriptor,
    Definition,
    Package,
)
from shapeindex.mods.descriptor import load_package, read_descriptor, find_preview
from shapeindex.mods.shapesets import SHAPE_LISTS, parse_shapesets
from shapeindex.mods.registry import PackageRegistry, ReloadResult, insert_if_absent

__all__ = [
    # Errors
    "ShapeIndexError",
    "DescriptorReadError",
    "DescriptorParseError",
    "UnsupportedPackageTypeError",
    "DefinitionsDirectoryMissingError",
    "DefinitionsDirectoryReadError",
    "DefinitionFileParseError",
    "DefinitionTreeTooDeepError",
    "InstallationNotConfiguredError",
    # Models
    "SUPPORTED_PACKAGE_TYPE",
    "ShapeCategory",
    "Descriptor",
    "Definition",
    "Package",
    # Loading
    "load_package",
    "read_descriptor",
    "find_preview",
    "SHAPE_LISTS",
    "parse_shapesets",
    # Registry
    "PackageRegistry",
    "ReloadResult",
    "insert_if_absent",
]
