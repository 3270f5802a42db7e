"""Command line parser for the interactive console."""

import re
from dataclasses import dataclass, field

Flags = dict[str, str | int | float | bool]

# "double quoted" | 'single quoted' | bare run; an escaped quote does not close its span
_TOKEN_RE = re.compile(r'"((?:[^"\\]|\\.)*)"|\'((?:[^\'\\]|\\.)*)\'|(\S+)', re.DOTALL)
_NUMBER_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")


@dataclass
class ParsedLine:
    """Result of parsing a command line (without its leading slash)."""

    command: str  # e.g., "status"
    args: list[str] = field(default_factory=list)  # positional args
    flags: Flags = field(default_factory=dict)  # --key, --key=value, -abc


def tokenize(text: str) -> list[str]:
    """
    Split text into shell-like tokens, respecting quoted strings.

    A quoted span is one token with its quotes removed. Backslash escapes
    inside a span are kept as written. An unterminated quote never raises;
    the quote character simply starts an ordinary token.
    """
    tokens: list[str] = []
    for match in _TOKEN_RE.finditer(text):
        double, single, bare = match.groups()
        if double is not None:
            tokens.append(double)
        elif single is not None:
            tokens.append(single)
        else:
            tokens.append(bare)
    return tokens


def _coerce(value: str) -> str | int | float:
    """Turn numeric-looking flag values into numbers."""
    match = _NUMBER_RE.fullmatch(value)
    if match is None:
        return value
    if match.group(1):
        return float(value)
    return int(value)


def parse_flags_and_args(tokens: list[str]) -> tuple[list[str], Flags]:
    """
    Split tokens into positional args and flags.

    Supports:
        --flag            -> {"flag": True}
        --key=value       -> {"key": "value"} (numbers are coerced)
        -abc              -> {"a": True, "b": True, "c": True}
        -q                -> {"q": True}
        -- rest...        -> everything after "--" is positional

    Later flags overwrite earlier ones with the same name.
    """
    args: list[str] = []
    flags: Flags = {}

    for i, token in enumerate(tokens):
        if token == "--":
            args.extend(tokens[i + 1:])
            break
        elif token.startswith("--"):
            key, sep, value = token[2:].partition("=")
            flags[key] = _coerce(value) if sep else True
        elif token.startswith("-") and len(token) > 2:
            for ch in token[1:]:
                flags[ch] = True
        elif token.startswith("-") and len(token) == 2:
            flags[token[1]] = True
        else:
            args.append(token)

    return args, flags


def parse_line(text: str) -> ParsedLine:
    """
    Parse a command line into a ParsedLine.

    The leading slash must already be stripped; the first token is the
    command name and the rest are args and flags.
    """
    tokens = tokenize(text.strip())
    if not tokens:
        return ParsedLine(command="")

    args, flags = parse_flags_and_args(tokens[1:])
    return ParsedLine(command=tokens[0], args=args, flags=flags)
