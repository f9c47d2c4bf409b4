"""
Data Models for mod packages

Dataclasses for packages, their descriptors and the shape definitions
indexed out of their ShapeSets trees.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, Callable


SUPPORTED_PACKAGE_TYPE = "Blocks and Parts"

DESCRIPTOR_FILENAME = "description.json"

# Relative to the package root
SHAPESETS_SUBDIR = Path("Objects") / "Database" / "ShapeSets"

PREVIEW_EXTENSIONS = ("png", "jpg", "gif")

DEFAULT_PREVIEW = "$GAME_DATA/ExampleMods/Blocks and Parts/preview.jpg"

MOD_DATA_TOKEN = "$MOD_DATA"


class ShapeCategory(Enum):
    """Kind of shape a definition describes."""
    BLOCK = "block"
    PART = "part"
    JOINT = "joint"


_DESCRIPTOR_FIELDS = ("localId", "name", "description", "type", "version", "creatorId", "fileId")


@dataclass
class Descriptor:
    """
    Contents of a package's description.json.

    Known fields are typed; every other key is kept in ``extra`` so that
    ``to_dict()`` reproduces the source document.
    """
    local_id: str
    name: str = ""
    description: str = ""
    type: str = SUPPORTED_PACKAGE_TYPE
    version: int = 0
    creator_id: Optional[int] = None
    file_id: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_workshop(self) -> bool:
        return self.file_id is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Descriptor":
        return cls(
            local_id=data.get("localId"),
            name=data.get("name", ""),
            description=data.get("description", ""),
            type=data.get("type"),
            version=data.get("version", 0),
            creator_id=data.get("creatorId"),
            file_id=data.get("fileId"),
            extra={k: v for k, v in data.items() if k not in _DESCRIPTOR_FIELDS},
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "localId": self.local_id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "version": self.version,
        }
        if self.creator_id is not None:
            data["creatorId"] = self.creator_id
        if self.file_id is not None:
            data["fileId"] = self.file_id
        data.update(self.extra)
        return data

    def __repr__(self):
        return f"Descriptor({self.local_id}, {self.name!r})"


@dataclass
class Definition:
    """A single shape definition taken from a shapeset file."""
    category: ShapeCategory
    uuid: str
    owner_local_id: str
    payload: Dict[str, Any]

    def __repr__(self):
        return f"Definition({self.category.value} {self.uuid} from {self.owner_local_id})"


@dataclass
class Package:
    """
    A mod package: a directory with a descriptor and a ShapeSets tree.

    Built-in (vanilla) packages are synthetic: their descriptor is authored
    in code rather than read from disk.
    """
    directory: Path
    descriptor: Descriptor
    is_synthetic: bool = False
    preview_path: Optional[Path] = None
    definitions: Dict[str, Definition] = field(default_factory=dict)

    @property
    def local_id(self) -> str:
        return self.descriptor.local_id

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def shapesets_dir(self) -> Path:
        return self.directory / SHAPESETS_SUBDIR

    @property
    def definition_count(self) -> int:
        return len(self.definitions)

    def has_definition(self, uuid: str) -> bool:
        return uuid in self.definitions

    def expand_placeholders(self, text: str, upstream: Optional[Callable[[str], str]] = None) -> str:
        """Replace $MOD_DATA with this package's directory, then hand off to ``upstream``."""
        text = text.replace(MOD_DATA_TOKEN, str(self.directory))
        if upstream is not None:
            text = upstream(text)
        return text

    def __repr__(self):
        kind = "builtin" if self.is_synthetic else "mod"
        return f"Package({self.local_id}, {kind}, {self.definition_count} shapes)"
