"""
Game and user directory layout.

The PathResolver turns the three configured roots (installation, user
profile, Steam Workshop content) into the directories the mod registry
scans, and expands the installation-level path placeholders:

- $GAME_DATA       <installation>/Data
- $SURVIVAL_DATA   <installation>/Survival
- $CHALLENGE_DATA  <installation>/ChallengeData

Locating the installation itself (Steam registry keys, library folders,
directory pickers) is left to the caller.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

from shapeindex.mods.errors import InstallationNotConfiguredError

logger = logging.getLogger(__name__)


GAME_EXECUTABLE = Path("Release") / "ScrapMechanic.exe"

USER_DIR_PATTERN = re.compile(r"^User_\d+$")

# (localId, name, description, placeholder of the content root)
BUILTIN_CONTENT = (
    ("creative", "Vanilla - Creative mode",
     "All blocks, parts and joints from vanilla creative mode", "$GAME_DATA"),
    ("survival", "Vanilla - Survival mode",
     "All blocks, parts and joints from vanilla survival mode", "$SURVIVAL_DATA"),
    ("challenge", "Vanilla - Challenge mode",
     "All blocks, parts and joints from vanilla challenge mode", "$CHALLENGE_DATA"),
)


def is_valid_install_dir(path: Path) -> bool:
    """Check that ``path`` looks like a game installation."""
    return (Path(path) / GAME_EXECUTABLE).exists()


def find_user_dir(base: Path) -> Optional[Path]:
    """
    Find the most recently modified User_<steamid> directory under ``base``.

    Returns None if ``base`` does not exist or holds no user directories.
    """
    base = Path(base)
    if not base.is_dir():
        return None

    candidates = [
        p for p in base.iterdir()
        if USER_DIR_PATTERN.match(p.name) and p.is_dir()
    ]
    if not candidates:
        return None

    candidates.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    return candidates[0]


class PathResolver:
    """Resolved directories of one game installation and user profile."""

    def __init__(
        self,
        installation_dir: Path,
        user_dir: Optional[Path] = None,
        workshop_dir: Optional[Path] = None,
    ):
        if installation_dir is None:
            raise InstallationNotConfiguredError()

        self.installation_dir = Path(installation_dir)
        self.user_dir = Path(user_dir) if user_dir else None
        self.workshop_dir = Path(workshop_dir) if workshop_dir else None

        self.game_data = self.installation_dir / "Data"
        self.survival_data = self.installation_dir / "Survival"
        self.challenge_data = self.installation_dir / "ChallengeData"

    @classmethod
    def from_config(cls, config) -> "PathResolver":
        """Build a resolver from a ShapeIndexConfig."""
        if config.installation_dir is None:
            raise InstallationNotConfiguredError(
                "Installation directory not configured. Set installation_dir in "
                "~/.shapeindex/config.yaml or SHAPEINDEX_INSTALL_DIR."
            )

        user_dir = config.user_dir
        if user_dir is None and config.user_base_dir is not None:
            user_dir = find_user_dir(config.user_base_dir)
            if user_dir is None:
                logger.warning("No User_<id> directory found in %s", config.user_base_dir)

        return cls(config.installation_dir, user_dir, config.workshop_dir)

    @property
    def user_mods_dir(self) -> Optional[Path]:
        if self.user_dir is None:
            return None
        return self.user_dir / "Mods"

    def content_directories(self) -> List[Optional[Path]]:
        """Mod directories in precedence order: local mods before workshop."""
        return [self.user_mods_dir, self.workshop_dir]

    def builtin_roots(self) -> List[Tuple[str, str, str, Path]]:
        """(localId, name, description, directory) of each built-in package."""
        return [
            (local_id, name, description, Path(self.expand_placeholders(token)))
            for local_id, name, description, token in BUILTIN_CONTENT
        ]

    def expand_placeholders(self, text: str) -> str:
        return (
            text.replace("$GAME_DATA", str(self.game_data))
            .replace("$SURVIVAL_DATA", str(self.survival_data))
            .replace("$CHALLENGE_DATA", str(self.challenge_data))
        )

    def __repr__(self):
        return f"PathResolver({self.installation_dir})"
