"""
Mod Registry

Loads the built-in (vanilla) packages and every mod found in the configured
content directories, and answers lookups over them.

Usage:
    registry = PackageRegistry(PathResolver.from_config(get_config()))

    result = registry.reload(parse_definitions=True)
    print(f"{result.package_count} mods, {result.definition_count} shapes")

    owners = registry.lookup_by_uuid("a6c6ce30-dd47-4587-b475-085d55c6a3b4")
    path = registry.expand_placeholders("$CONTENT_<localId>/Objects/Mesh/x.fbx")

Precedence: the first package registered under a localId wins. Built-in
packages are registered first, then the local mods directory, then the
workshop directory, so a local copy of a workshop mod shadows the
subscribed one.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from shapeindex.mods.descriptor import has_descriptor, load_package, make_package
from shapeindex.mods.errors import ShapeIndexError, UnsupportedPackageTypeError
from shapeindex.mods.models import Descriptor, Package, SUPPORTED_PACKAGE_TYPE
from shapeindex.mods.shapesets import DEFAULT_MAX_DEPTH, parse_shapesets

logger = logging.getLogger(__name__)


CONTENT_TOKEN = re.compile(
    r"\$CONTENT_([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})"
)


@dataclass
class ReloadResult:
    """Outcome of a registry reload."""
    package_count: int
    definition_count: int
    skipped_collisions: List[str] = field(default_factory=list)


def insert_if_absent(packages: Dict[str, Package], package: Package) -> bool:
    """Add ``package`` unless its localId is taken. Returns True if added."""
    if package.local_id in packages:
        return False
    packages[package.local_id] = package
    return True


class PackageRegistry:
    """
    All mod packages visible to one game installation, keyed by localId.

    The package map is rebuilt from scratch by reload() and swapped in once
    complete, so readers never see a half-built registry.
    """

    def __init__(self, resolver, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Args:
            resolver: PathResolver (or compatible) supplying directories and
                      installation-level placeholder expansion
            max_depth: Nesting cap for ShapeSets tree walks
        """
        self.resolver = resolver
        self.max_depth = max_depth
        self._packages: Dict[str, Package] = {}

    # -- loading -----------------------------------------------------------

    def reload(self, parse_definitions: bool = False) -> ReloadResult:
        """
        Discard all packages and load them again from disk.

        A package that fails to load is logged and dropped; the reload
        itself always completes.
        """
        packages: Dict[str, Package] = {}
        collisions: List[str] = []

        def register(package: Package) -> None:
            if insert_if_absent(packages, package):
                logger.info("Loaded mod {name: %s, localId: %s}", package.name, package.local_id)
            else:
                logger.debug("Skipping %s: localId %s already provided by %s",
                             package.directory, package.local_id,
                             packages[package.local_id].directory)
                collisions.append(package.local_id)

        for package in self._builtin_packages():
            if parse_definitions and not self._try_parse(package):
                continue
            register(package)

        for mods_dir in self.resolver.content_directories():
            if mods_dir is None or not Path(mods_dir).is_dir():
                logger.warning('Mod directory "%s" does not exist!', mods_dir)
                continue

            try:
                directories = sorted(p for p in Path(mods_dir).iterdir() if p.is_dir())
            except OSError as e:
                logger.warning('Cannot list mod directory "%s": %s', mods_dir, e)
                continue

            for directory in directories:
                package = self._discover(directory)
                if package is None:
                    continue
                if parse_definitions and not self._try_parse(package):
                    continue
                register(package)

        self._packages = packages

        result = ReloadResult(
            package_count=len(packages),
            definition_count=self.definition_count,
            skipped_collisions=collisions,
        )
        logger.info("Loaded %d mods with %d shapes", result.package_count, result.definition_count)
        return result

    def _builtin_packages(self) -> List[Package]:
        packages = []
        for local_id, name, description, directory in self.resolver.builtin_roots():
            descriptor = Descriptor(
                local_id=local_id,
                name=name,
                description=description,
                type=SUPPORTED_PACKAGE_TYPE,
                version=0,
            )
            packages.append(make_package(directory, descriptor, is_synthetic=True,
                                         expand=self.resolver.expand_placeholders))
        return packages

    def _discover(self, directory: Path) -> Optional[Package]:
        """Load the package in ``directory``, or None if it is not a usable mod."""
        if not has_descriptor(directory):
            logger.debug("No descriptor in %s", directory)
            return None

        try:
            return load_package(directory, expand=self.resolver.expand_placeholders)
        except UnsupportedPackageTypeError as e:
            logger.debug("Skipping %s: not a blocks and parts mod (%r)", directory, e.package_type)
        except ShapeIndexError as e:
            logger.warning('Failed loading mod in "%s": %s', directory, e)
        return None

    def _try_parse(self, package: Package) -> bool:
        try:
            parse_shapesets(package, max_depth=self.max_depth)
        except ShapeIndexError as e:
            logger.warning(
                "Failed parsing shapesets of mod {name: %s, localId: %s, dir: %s}: %s",
                package.name, package.local_id, package.directory, e,
            )
            return False
        return True

    def parse_definitions(self) -> int:
        """Parse the ShapeSets of every registered package. Returns the total shape count."""
        return sum(
            parse_shapesets(package, max_depth=self.max_depth)
            for package in self._packages.values()
        )

    def register(self, package: Package) -> bool:
        """Add a package unless its localId is already registered."""
        return insert_if_absent(self._packages, package)

    # -- queries -----------------------------------------------------------

    @property
    def packages(self) -> Dict[str, Package]:
        """Snapshot of the registered packages in registration order."""
        return dict(self._packages)

    @property
    def definition_count(self) -> int:
        return sum(p.definition_count for p in self._packages.values())

    def get(self, local_id: str) -> Optional[Package]:
        return self._packages.get(local_id)

    def lookup_by_uuid(self, uuid: str) -> List[Package]:
        """Every registered package that defines shape ``uuid``."""
        return [p for p in self._packages.values() if p.has_definition(uuid)]

    def expand_placeholders(self, text: str) -> str:
        """
        Replace $CONTENT_<localId> with the matching package directory, then
        expand the installation-level placeholders. Tokens naming unknown
        packages are left untouched.
        """
        def replace(match: re.Match) -> str:
            package = self._packages.get(match.group(1))
            return str(package.directory) if package is not None else match.group(0)

        text = CONTENT_TOKEN.sub(replace, text)
        return self.resolver.expand_placeholders(text)

    def expand_package_placeholders(self, package: Package, text: str) -> str:
        """Expand $MOD_DATA for ``package``, then everything else."""
        return package.expand_placeholders(text, self.expand_placeholders)

    def __len__(self) -> int:
        return len(self._packages)

    def __contains__(self, local_id: str) -> bool:
        return local_id in self._packages

    def __iter__(self) -> Iterator[Package]:
        return iter(list(self._packages.values()))

    def __repr__(self):
        return f"PackageRegistry({len(self._packages)} mods)"
