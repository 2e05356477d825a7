"""Tests for REPL input parsing."""

from wipboard.repl.parser import parse_command


def test_plain_command_with_text():
    result = parse_command("add Buy milk")
    assert result.command == "add"
    assert result.args == ["Buy", "milk"]
    assert result.text == "Buy milk"
    assert result.flags == {}


def test_quoted_text_and_column_flag():
    result = parse_command('ADD "Fix login page" --column todo')
    assert result.command == "add"
    assert result.args == ["Fix login page"]
    assert result.flags == {"column": "todo"}


def test_short_column_flag():
    result = parse_command("add Fix it -c in-progress")
    assert result.flags == {"column": "in-progress"}
    assert result.text == "Fix it"


def test_boolean_flag_takes_no_value():
    result = parse_command("ls --raw extra")
    assert result.flags == {"raw": True}
    assert result.args == ["extra"]


def test_flag_without_value_at_end():
    result = parse_command("add thing --column")
    assert result.flags == {"column": True}


def test_negative_looking_text_is_an_argument():
    result = parse_command("add -5 degrees")
    assert result.args == ["-5", "degrees"]


def test_unclosed_quote_falls_back_to_split():
    result = parse_command('add "unterminated text')
    assert result.args == ['"unterminated', "text"]


def test_empty_input():
    result = parse_command("   ")
    assert result.command == ""
    assert result.args == []
