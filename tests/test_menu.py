import io

import pytest

from picbattle.ai import AIDifficulty
from picbattle.console import Console
from picbattle.menu import MainMenu, main


def _console(lines):
    remaining = iter(lines)

    def read():
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    output = io.StringIO()
    return Console(read, output), output


def _menu(tmp_path, lines):
    console, output = _console(lines)
    return MainMenu(console, tmp_path), output


def test_init_loads_builtins_and_creates_files(tmp_path):
    menu, output = _menu(tmp_path, [])
    assert [c.name for c in menu.roster] == ["OG", "Helios", "Duran", "Philip", "Razor", "Sunny"]
    assert (tmp_path / "characters.txt").read_text().startswith("# Format: TYPE;NAME;HP")
    assert "OG" in (tmp_path / "gauntlet_unlocks.txt").read_text().splitlines()
    assert "No custom character file found" in output.getvalue()


def test_exit_saves_and_reports(tmp_path):
    menu, output = _menu(tmp_path, ["6"])
    menu.run()
    text = output.getvalue()
    assert menu.exit_game is True
    assert "Saving characters and exiting..." in text
    assert text.rstrip().endswith("GAME OVER!")


def test_exit_keeps_custom_characters(tmp_path):
    (tmp_path / "characters.txt").write_text("CUSTOM;Zed;10;1;2;3;1,1,5,0\n")
    menu, output = _menu(tmp_path, ["6"])
    menu.run()
    assert "Loaded custom character: Zed" in output.getvalue()
    assert "CUSTOM;Zed;10;1;2;3;1,1,5,0" in (tmp_path / "characters.txt").read_text()


def test_invalid_choice_is_reprompted(tmp_path):
    menu, output = _menu(tmp_path, ["9", "6"])
    menu.run()
    assert "Please enter a number between 1 and 6" in output.getvalue()
    assert menu.exit_game is True


@pytest.mark.parametrize(
    "answer, expected",
    [("1", AIDifficulty.EASY), ("2", AIDifficulty.HARD)],
)
def test_choose_difficulty(tmp_path, answer, expected):
    menu, output = _menu(tmp_path, [answer, ""])
    assert menu.choose_difficulty() is expected
    assert menu.game.ai_difficulty is expected
    assert f"AI difficulty set to {expected.value}." in output.getvalue()


def test_difficulty_shown_in_menu_after_change(tmp_path):
    menu, output = _menu(tmp_path, ["5", "1", "", "6"])
    menu.run()
    text = output.getvalue()
    assert "1. Start Battle (AI: Hard)" in text
    assert "1. Start Battle (AI: Easy)" in text
    assert menu.game.ai_difficulty is AIDifficulty.EASY


def test_creator_back_returns(tmp_path):
    menu, output = _menu(tmp_path, ["4"])
    menu.run_creator()
    assert "CHARACTER CREATOR" in output.getvalue()
    assert len(menu.roster) == 6


def test_creator_creates_and_saves_character(tmp_path):
    inputs = ["4", "1", "Zed", "10", "1", "1", "1", "0", "", "4", "6"]
    menu, output = _menu(tmp_path, inputs)
    menu.run()
    created = menu.roster.find("Zed")
    assert created is not None
    assert created.max_hp == 10
    assert "CUSTOM;Zed;10;1;1;1" in (tmp_path / "characters.txt").read_text()
    assert "Character 'Zed' created successfully!" in output.getvalue()


def test_creator_deletes_character(tmp_path):
    (tmp_path / "characters.txt").write_text("CUSTOM;Zed;10;1;2;3\n")
    menu, output = _menu(tmp_path, ["3", "1", "", "4"])
    menu.run_creator()
    assert menu.roster.find("Zed") is None
    assert "Zed" not in (tmp_path / "characters.txt").read_text()
    assert "Character 'Zed' deleted." in output.getvalue()


def test_running_out_of_input_raises_eof(tmp_path):
    menu, _ = _menu(tmp_path, [])
    with pytest.raises(EOFError):
        menu.run()


def test_main_exits_cleanly(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda: "6")
    data_dir = tmp_path / "data"
    assert main(["--directory", str(data_dir)]) == 0
    assert "GAME OVER!" in capsys.readouterr().out
    assert (data_dir / "characters.txt").exists()


def test_main_reports_end_of_input(tmp_path, monkeypatch):
    def no_input():
        raise EOFError

    monkeypatch.setattr("builtins.input", no_input)
    assert main(["--directory", str(tmp_path)]) == 1