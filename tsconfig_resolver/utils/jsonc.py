"""Tolerant JSON-with-comments parsing for tsconfig/jsconfig files."""

from __future__ import annotations

import json
from pathlib import Path

from tsconfig_resolver.errors import TsConfigParseError
from tsconfig_resolver.models.json_value import JSONValue

_BOM = "\ufeff"


def _line_col(text: str, index: int) -> tuple[int, int]:
    line = text.count("\n", 0, index) + 1
    column = index - text.rfind("\n", 0, index)
    return line, column


def strip_jsonc(text: str, *, path: Path | None = None) -> str:
    """Blank out // and /* */ comments while preserving quoted strings.

    Every removed character becomes a space (newlines are kept), so offsets,
    line and column numbers in the result match the input.
    """
    result: list[str] = []
    i = 0
    state = "normal"
    comment_start = 0

    while i < len(text):
        ch = text[i]
        nxt = text[i + 1] if i + 1 < len(text) else ""

        if state == "normal":
            if ch == "/" and nxt == "/":
                result.append("  ")
                i += 1
                state = "line_comment"
            elif ch == "/" and nxt == "*":
                result.append("  ")
                comment_start = i
                i += 1
                state = "block_comment"
            elif ch == '"':
                result.append(ch)
                state = "string"
            else:
                result.append(ch)
        elif state == "line_comment":
            if ch == "\n":
                result.append(ch)
                state = "normal"
            else:
                result.append(" ")
        elif state == "block_comment":
            if ch == "*" and nxt == "/":
                result.append("  ")
                i += 1
                state = "normal"
            else:
                result.append("\n" if ch == "\n" else " ")
        elif state == "string":
            result.append(ch)
            if ch == "\\":
                if i + 1 < len(text):
                    i += 1
                    result.append(text[i])
            elif ch == '"':
                state = "normal"

        i += 1

    if state == "block_comment":
        line, column = _line_col(text, comment_start)
        raise TsConfigParseError(
            "Unterminated block comment", path=path, line=line, column=column
        )

    return "".join(result)


def strip_trailing_commas(text: str) -> str:
    """Blank out a comma that directly precedes a closing ``}`` or ``]``.

    Expects comment-free text (see strip_jsonc). Only the last comma before a
    bracket is removed, so ``[1,,]`` stays invalid.
    """
    chars = list(text)
    in_string = False
    i = 0

    while i < len(chars):
        ch = chars[i]
        if in_string:
            if ch == "\\":
                i += 1
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < len(chars) and chars[j] in " \t\r\n":
                j += 1
            if j < len(chars) and chars[j] in "}]":
                chars[i] = " "
        i += 1

    return "".join(chars)


def parse_jsonc(text: str, *, path: Path | None = None) -> JSONValue:
    """Parse tsconfig-flavoured JSON into a plain value tree.

    Args:
        text: Raw file contents.
        path: Source file, attached to errors for diagnostics.

    Returns:
        The parsed value (dicts keep key order; duplicate keys are last-write-wins).

    Raises:
        TsConfigParseError: If the text is not valid JSON once comments and
            trailing commas are removed.
    """
    if text.startswith(_BOM):
        text = " " + text[len(_BOM):]

    cleaned = strip_trailing_commas(strip_jsonc(text, path=path))

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise TsConfigParseError(
            exc.msg, path=path, line=exc.lineno, column=exc.colno
        ) from exc
