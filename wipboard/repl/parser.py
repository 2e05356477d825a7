"""
FILE: wipboard/repl/parser.py
PURPOSE: Parse user input into commands and arguments for REPL
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
  - dataclasses (for ParseResult)
NOTES:
  - Handles quoted strings: add "card with spaces"
  - Value flags: --column todo (or -c todo)
  - Boolean flags: --raw
  - Case-insensitive command names
"""

import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Union

# Single-dash aliases for long flags
SHORT_FLAGS = {
    "c": "column",
    "r": "raw",
}

# Flags that never take a value
BOOLEAN_FLAGS = {"raw"}


@dataclass
class ParseResult:
    """
    Result of parsing a REPL command.

    Attributes:
        command: The command name (e.g., "add", "mv", "undo")
        args: Positional arguments (e.g., ["3f2a", "done"])
        flags: Flag arguments as dict (e.g., {"column": "todo", "raw": True})
        raw_input: Original input string
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, Union[str, bool]] = field(default_factory=dict)
    raw_input: str = ""

    @property
    def text(self) -> str:
        """Positional args joined back together (for unquoted card text)."""
        return " ".join(self.args)


def _flag_name(token: str) -> str:
    if token.startswith("--"):
        return token[2:].lower()
    name = token[1:].lower()
    return SHORT_FLAGS.get(name, name)


def _is_flag(token: str) -> bool:
    if token.startswith("--"):
        return len(token) > 2
    return token.startswith("-") and token[1:].lower() in SHORT_FLAGS


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command, args, and flags.

    Examples:
        >>> parse_command("add Buy milk")
        ParseResult(command="add", args=["Buy", "milk"], flags={})

        >>> parse_command('add "Fix login" --column todo')
        ParseResult(command="add", args=["Fix login"], flags={"column": "todo"})

        >>> parse_command("ls --raw")
        ParseResult(command="ls", args=[], flags={"raw": True})

    Notes:
        - Command is always the first token (case-insensitive)
        - Unclosed quotes fall back to whitespace splitting
        - Empty input returns command="" with no args/flags
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    command = tokens[0].lower()
    args: List[str] = []
    flags: Dict[str, Union[str, bool]] = {}

    i = 1
    while i < len(tokens):
        token = tokens[i]
        if _is_flag(token):
            name = _flag_name(token)
            has_value = (
                name not in BOOLEAN_FLAGS
                and i + 1 < len(tokens)
                and not _is_flag(tokens[i + 1])
            )
            if has_value:
                flags[name] = tokens[i + 1]
                i += 2
            else:
                flags[name] = True
                i += 1
        else:
            args.append(token)
            i += 1

    return ParseResult(command=command, args=args, flags=flags, raw_input=input_str)
