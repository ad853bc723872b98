# tests/test_utils.py
"""Unit tests for configuration helpers in the `rowedit.utils.utils` module."""

from pathlib import Path

from rowedit.utils import utils


def test_deep_merge() -> None:
    """Verify that `deep_merge` correctly merges nested dictionaries.

    This test ensures:
    - Existing values are preserved if not overridden.
    - Nested dictionaries are merged recursively.
    - Conflicting keys are overridden by values from the second dictionary.
    """
    base = {"a": 1, "b": {"x": 10, "y": 20}}
    override = {"b": {"y": 99, "z": 100}, "c": 3}
    result = utils.deep_merge(base, override)
    expected = {"a": 1, "b": {"x": 10, "y": 99, "z": 100}, "c": 3}
    assert result == expected
    assert base == {"a": 1, "b": {"x": 10, "y": 20}}


def test_load_config_without_user_file(tmp_path: Path) -> None:
    config = utils.load_config(tmp_path / "absent.toml")
    assert config == utils.DEFAULT_CONFIG
    assert config is not utils.DEFAULT_CONFIG


def test_load_config_merges_user_file(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "[editor]\n"
        "quit_times = 5\n"
        "\n"
        "[syntax.languages.lua]\n"
        'filematch = [".lua"]\n'
        'singleline_comment = "--"\n'
    )
    config = utils.load_config(path)
    assert config["editor"]["quit_times"] == 5
    assert config["editor"]["message_timeout"] == 5
    assert config["syntax"]["guess_with_pygments"] is True
    assert config["syntax"]["languages"]["lua"]["filematch"] == [".lua"]


def test_load_config_corrupted_file_falls_back(tmp_path: Path, caplog) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[editor\nquit_times = ")
    config = utils.load_config(path)
    assert config == utils.DEFAULT_CONFIG
    assert "Could not parse user config" in caplog.text


def test_ansi_to_curses_color() -> None:
    assert utils.ansi_to_curses_color(31) == 1
    assert utils.ansi_to_curses_color(36) == 6
    assert utils.ansi_to_curses_color(99) == 7
    assert utils.ansi_to_curses_color(33, {"colors": {"33": "Magenta"}}) == 5
    assert utils.ansi_to_curses_color(33, {"colors": {"33": "chartreuse"}}) == 7
