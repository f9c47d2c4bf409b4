"""
Tests for PathResolver and directory discovery helpers.
"""

import os
from pathlib import Path

import pytest

from shapeindex.config import ShapeIndexConfig
from shapeindex.mods import InstallationNotConfiguredError
from shapeindex.paths import PathResolver, find_user_dir, is_valid_install_dir


class TestPathResolver:

    def test_derived_directories(self, tmp_path):
        resolver = PathResolver(tmp_path / "SM", tmp_path / "User_1", tmp_path / "ws")

        assert resolver.game_data == tmp_path / "SM" / "Data"
        assert resolver.survival_data == tmp_path / "SM" / "Survival"
        assert resolver.challenge_data == tmp_path / "SM" / "ChallengeData"
        assert resolver.user_mods_dir == tmp_path / "User_1" / "Mods"

    def test_content_directory_order(self, tmp_path):
        resolver = PathResolver(tmp_path / "SM", tmp_path / "User_1", tmp_path / "ws")
        assert resolver.content_directories() == [tmp_path / "User_1" / "Mods", tmp_path / "ws"]

    def test_unset_directories(self, tmp_path):
        resolver = PathResolver(tmp_path / "SM")
        assert resolver.content_directories() == [None, None]

    def test_builtin_roots(self, tmp_path):
        resolver = PathResolver(tmp_path / "SM")
        roots = resolver.builtin_roots()

        assert [r[0] for r in roots] == ["creative", "survival", "challenge"]
        assert [r[3] for r in roots] == [resolver.game_data, resolver.survival_data, resolver.challenge_data]

    def test_expand_placeholders(self, tmp_path):
        resolver = PathResolver(tmp_path / "SM")
        expanded = resolver.expand_placeholders("$GAME_DATA/a|$CHALLENGE_DATA/b|$GAME_DATA/c|$OTHER")
        assert expanded == (
            f"{resolver.game_data}/a|{resolver.challenge_data}/b|{resolver.game_data}/c|$OTHER"
        )

    def test_requires_installation(self):
        with pytest.raises(InstallationNotConfiguredError):
            PathResolver(None)


class TestFromConfig:

    def test_from_config(self, tmp_path, install_dir, workshop_dir):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            f"installation_dir: '{install_dir}'\n"
            f"workshop_dir: '{workshop_dir}'\n",
            encoding="utf-8",
        )
        resolver = PathResolver.from_config(ShapeIndexConfig(config_file, load_env=False))

        assert resolver.installation_dir == install_dir
        assert resolver.workshop_dir == workshop_dir
        assert resolver.user_dir is None

    def test_user_dir_found_from_base(self, tmp_path, install_dir):
        base = tmp_path / "User"
        (base / "User_1").mkdir(parents=True)
        config = ShapeIndexConfig(tmp_path / "none.yaml", load_env=False)
        config.set("installation_dir", str(install_dir))
        config.set("user_base_dir", str(base))

        assert PathResolver.from_config(config).user_dir == base / "User_1"

    def test_missing_installation(self, tmp_path):
        config = ShapeIndexConfig(tmp_path / "none.yaml", load_env=False)
        with pytest.raises(InstallationNotConfiguredError):
            PathResolver.from_config(config)


class TestHelpers:

    def test_is_valid_install_dir(self, install_dir, tmp_path):
        assert is_valid_install_dir(install_dir)
        assert not is_valid_install_dir(tmp_path / "elsewhere")

    def test_find_user_dir_picks_newest(self, tmp_path):
        old = tmp_path / "User_100"
        new = tmp_path / "User_200"
        old.mkdir()
        new.mkdir()
        (tmp_path / "User_abc").mkdir()
        (tmp_path / "User_300").write_text("not a dir", encoding="utf-8")
        os.utime(old, (1_000_000, 1_000_000))
        os.utime(new, (2_000_000, 2_000_000))

        assert find_user_dir(tmp_path) == new

    def test_find_user_dir_none(self, tmp_path):
        assert find_user_dir(tmp_path) is None
        assert find_user_dir(tmp_path / "missing") is None
