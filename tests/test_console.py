import io

import pytest

from picbattle.console import Console


def scripted(lines):
    remaining = list(lines)

    def read():
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read


def make_console(lines):
    out = io.StringIO()
    return Console(scripted(lines), out), out


def test_say_writes_line():
    console, out = make_console([])
    console.say("hello")
    assert out.getvalue() == "hello\n"


def test_ask_int_accepts_valid_value():
    console, out = make_console(["3"])
    assert console.ask_int("Pick: ", 1, 5) == 3
    assert out.getvalue() == "Pick: "


def test_ask_int_retries_until_in_range():
    console, out = make_console(["abc", "9", "2"])
    assert console.ask_int("Pick: ", 1, 3) == 2
    assert out.getvalue().count("Invalid input. Please enter a number between 1 and 3: ") == 2


def test_ask_int_ignores_trailing_text_and_blank_lines():
    console, _ = make_console(["", "   ", "4 apples"])
    assert console.ask_int("n? ", 0, 10) == 4


def test_ask_int_negative_numbers():
    console, _ = make_console(["-7"])
    assert console.ask_int("n? ", -10, 10) == -7


def test_ask_int_rejects_oversized_number():
    console, out = make_console(["99999999999", "5"])
    assert console.ask_int("n? ") == 5
    assert "Invalid input" in out.getvalue()


def test_ask_int_raises_at_end_of_input():
    console, _ = make_console(["x"])
    with pytest.raises(EOFError):
        console.ask_int("n? ", 1, 2)


def test_ask_string_strips_whitespace():
    console, _ = make_console(["  Zed \t"])
    assert console.ask_string("Name: ") == "Zed"


def test_ask_string_rejects_empty_and_semicolons():
    console, out = make_console(["   ", "a;b", "Ok"])
    assert console.ask_string("Name: ") == "Ok"
    text = out.getvalue()
    assert "Input cannot be empty. Please try again: Name: " in text
    assert "Input cannot contain semicolons (;). Please try again: Name: " in text


def test_pause_consumes_one_line():
    read = scripted(["", "next"])
    out = io.StringIO()
    console = Console(read, out)
    console.pause()
    assert out.getvalue() == "Press Enter to continue..."
    assert read() == "next"


def test_pause_tolerates_end_of_input():
    console, out = make_console([])
    console.pause("Wait...")
    assert out.getvalue() == "Wait..."


def test_clear_writes_nothing_when_not_a_terminal():
    console, out = make_console([])
    console.clear()
    assert out.getvalue() == ""