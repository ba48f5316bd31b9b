"""Tests for BingoSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from namebingo.config.settings import BingoSettings, find_config


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = BingoSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.verbose is False
        assert settings.seed is None
        assert settings.grid.width is None
        assert settings.card.default_name == "Joker"
        assert settings.card.strict is False
        assert settings.source.ldap_attribute == "cn"
        assert settings.serve.host == "127.0.0.1"
        assert settings.serve.port == 8000

    def test_frozen(self, tmp_path: Path) -> None:
        settings = BingoSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]

    def test_state_dir(self, tmp_path: Path) -> None:
        assert BingoSettings.from_cli(root=tmp_path).state_dir == tmp_path / ".namebingo"


class TestTomlSource:
    def test_loads_sections(self, tmp_path: Path) -> None:
        (tmp_path / "namebingo.toml").write_text(
            "seed = 3\n"
            "[grid]\nwidth = 5\nheight = 4\n"
            '[card]\ncenter = "FREE"\ndefault_name = "Gustav Geier"\n'
            '[source]\nkind = "file"\nlocator = "names.txt"\n'
        )
        settings = BingoSettings.from_cli(root=tmp_path)
        assert settings.seed == 3
        assert (settings.grid.width, settings.grid.height) == (5, 4)
        assert settings.card.center == "FREE"
        assert settings.card.default_name == "Gustav Geier"
        assert settings.source.kind == "file"
        assert settings.serve.port == 8000  # default preserved

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "bingo.toml"
        custom.parent.mkdir()
        custom.write_text('[card]\ntitle = "Office"\n')
        settings = BingoSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.card.title == "Office"
        assert settings.config_path == custom

    def test_missing_explicit_config_path(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="not found"):
            BingoSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "namebingo.toml").write_text("[grid\nwidth = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            BingoSettings.from_cli(root=tmp_path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        (tmp_path / "namebingo.toml").write_text("[grid]\nwidth = 0\n")
        with pytest.raises(click.ClickException, match="Invalid configuration"):
            BingoSettings.from_cli(root=tmp_path)

    def test_root_from_toml_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "namebingo.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = BingoSettings.from_cli()
        assert settings.root.resolve() == tmp_path.resolve()


class TestPriority:
    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "namebingo.toml").write_text("seed = 1\n")
        settings = BingoSettings.from_cli(root=tmp_path, seed=2)
        assert settings.seed == 2

    def test_none_flags_do_not_mask_toml(self, tmp_path: Path) -> None:
        (tmp_path / "namebingo.toml").write_text("seed = 1\nverbose = true\n")
        settings = BingoSettings.from_cli(root=tmp_path, seed=None, verbose=None)
        assert settings.seed == 1
        assert settings.verbose is True

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NAMEBINGO_SEED", "11")
        assert BingoSettings.from_cli(root=tmp_path).seed == 11

    def test_nested_env_var_beats_toml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "namebingo.toml").write_text("[grid]\nwidth = 3\nheight = 3\n")
        monkeypatch.setenv("NAMEBINGO_GRID__WIDTH", "6")
        settings = BingoSettings.from_cli(root=tmp_path)
        assert settings.grid.width == 6
        assert settings.grid.height == 3


class TestFindConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        config = tmp_path / "namebingo.toml"
        config.write_text("")
        deep = tmp_path / "x" / "y" / "z"
        deep.mkdir(parents=True)
        assert find_config(deep) == config.resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        other = tmp_path / "elsewhere.toml"
        other.write_text("")
        (tmp_path / "namebingo.toml").write_text("")
        monkeypatch.setenv("NAMEBINGO_CONFIG", str(other))
        assert find_config(tmp_path) == other

    def test_env_var_pointing_nowhere(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NAMEBINGO_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None
