"""
Pytest configuration and shared fixtures.

Builds throwaway game installations and mod folders under tmp_path.
"""

import json
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from shapeindex.mods import PackageRegistry
from shapeindex.paths import PathResolver


LOCAL_ID_A = "11111111-1111-4111-8111-111111111111"
LOCAL_ID_B = "22222222-2222-4222-8222-222222222222"
LOCAL_ID_C = "33333333-3333-4333-8333-333333333333"

BLOCK_UUID = "aaaaaaaa-0000-4000-8000-000000000001"
PART_UUID = "aaaaaaaa-0000-4000-8000-000000000002"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def shapeset(blocks=(), parts=()) -> dict:
    """A shapeset document with the given block and part uuids."""
    doc = {}
    if blocks:
        doc["blockList"] = [{"uuid": u, "color": "ffffff", "tiling": 4} for u in blocks]
    if parts:
        doc["partList"] = [{"uuid": u, "renderable": "$MOD_DATA/Objects/Renderable/x.rend"} for u in parts]
    return doc


def make_mod(parent: Path, dirname: str, local_id: str, name: str = None,
             mod_type: str = "Blocks and Parts", shapesets: dict = None, **extra) -> Path:
    """
    Create a mod folder with a description.json and optional shapeset files.

    ``shapesets`` maps paths relative to Objects/Database/ShapeSets to documents.
    """
    root = parent / dirname
    root.mkdir(parents=True, exist_ok=True)
    descriptor = {
        "localId": local_id,
        "name": name or dirname,
        "description": f"Test mod {dirname}",
        "type": mod_type,
        "version": 1,
    }
    descriptor.update(extra)
    write_json(root / "description.json", descriptor)

    for relpath, doc in (shapesets or {}).items():
        target = root / "Objects" / "Database" / "ShapeSets" / relpath
        if isinstance(doc, str):
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(doc, encoding="utf-8")
        else:
            write_json(target, doc)
    return root


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    """A fake installation with one shapeset per built-in content root."""
    inst = tmp_path / "Scrap Mechanic"
    for i, root in enumerate(("Data", "Survival", "ChallengeData")):
        write_json(
            inst / root / "Objects" / "Database" / "ShapeSets" / "vanilla.json",
            shapeset(blocks=[f"bbbbbbbb-0000-4000-8000-00000000000{i}"]),
        )
    (inst / "Release").mkdir()
    (inst / "Release" / "ScrapMechanic.exe").write_bytes(b"")
    return inst


@pytest.fixture
def user_dir(tmp_path: Path) -> Path:
    user = tmp_path / "User" / "User_76561198000000000"
    (user / "Mods").mkdir(parents=True)
    return user


@pytest.fixture
def workshop_dir(tmp_path: Path) -> Path:
    ws = tmp_path / "workshop" / "387990"
    ws.mkdir(parents=True)
    return ws


@pytest.fixture
def resolver(install_dir, user_dir, workshop_dir) -> PathResolver:
    return PathResolver(install_dir, user_dir, workshop_dir)


@pytest.fixture
def registry(resolver) -> PackageRegistry:
    return PackageRegistry(resolver)
