"""
Errors raised while loading mod packages and their shape definitions.
"""

from pathlib import Path
from typing import Optional


class ShapeIndexError(Exception):
    """Base class for all shapeindex errors."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class DescriptorReadError(ShapeIndexError):
    """Raised when a package's description.json is missing or unreadable."""
    def __init__(self, path: Path, reason: str):
        self.reason = reason
        super().__init__(f"Cannot read descriptor {path}: {reason}", path)


class DescriptorParseError(ShapeIndexError):
    """Raised when a descriptor is not valid JSON."""
    def __init__(self, path: Path, reason: str):
        self.reason = reason
        super().__init__(f"Invalid descriptor {path}: {reason}", path)


class UnsupportedPackageTypeError(ShapeIndexError):
    """Raised when a descriptor declares a type other than 'Blocks and Parts'."""
    def __init__(self, path: Optional[Path], package_type):
        self.package_type = package_type
        super().__init__(f"This is not a mod! type = {package_type!r} ({path})", path)


class DefinitionsDirectoryMissingError(ShapeIndexError):
    """Raised when the ShapeSets directory to parse does not exist."""
    def __init__(self, path: Path):
        super().__init__(f"ShapeSets directory doesn't exist! ({path})", path)


class DefinitionsDirectoryReadError(ShapeIndexError):
    """Raised when a directory inside a ShapeSets tree cannot be listed."""
    def __init__(self, path: Path, reason: str):
        self.reason = reason
        super().__init__(f"Cannot read ShapeSets directory {path}: {reason}", path)


class DefinitionFileParseError(ShapeIndexError):
    """Raised when a shapeset file cannot be decoded."""
    def __init__(self, path: Path, reason: str):
        self.reason = reason
        super().__init__(f"Failed parsing shapesets file {path}: {reason}", path)


class DefinitionTreeTooDeepError(ShapeIndexError):
    """Raised when a ShapeSets tree nests deeper than the configured cap."""
    def __init__(self, path: Path, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"ShapeSets tree deeper than {max_depth} levels at {path}", path)


class InstallationNotConfiguredError(ShapeIndexError):
    """Raised when no game installation directory is configured."""
    def __init__(self, message: str = "Installation directory not configured"):
        super().__init__(message)
