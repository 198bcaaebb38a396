"""Docstring parsing: comment text, first sentence and reST field tags."""

from __future__ import annotations

import ast
import inspect
import re

from declarations.models import DocComment

# ":name: text" or ":name argument: text"; inline roles such as ":class:`User`"
# are body text.
_FIELD_LINE = re.compile(
    r"^:(?P<name>[A-Za-z_][\w-]*)(?:\s+(?P<arg>[^:]+?))?:(?![\w:]*`)\s*(?P<text>.*)$"
)
_FIRST_SENTENCE = re.compile(r"^(.*?\.)(?=\s|$)", re.DOTALL)

PARAM_TAGS = frozenset({"param", "parameter", "arg", "argument"})


def string_literal_value(source: str) -> str | None:
    """Evaluate the source text of a string literal node, if it is one."""
    try:
        value = ast.literal_eval(source)
    except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
        return None
    if isinstance(value, bytes):
        return None
    return value if isinstance(value, str) else None


def first_sentence(text: str) -> str:
    """Return text up to and including the first period followed by space.

    Text without such a period is a single sentence.
    """
    match = _FIRST_SENTENCE.match(text)
    if match is None:
        return text
    return match.group(1)


def parse_docstring(raw: str | None) -> DocComment:
    """Split a docstring into body text, its first sentence and field tags.

    ``:param name: text`` lines fill ``param_tags``; every other field line
    is appended to ``tags`` under its name, with any field argument kept in
    front of the text (``:HTTP 404: Not Found`` reads as ``404 Not Found``).
    Indented lines continue the preceding field.
    """
    if not raw:
        return DocComment()

    text_lines: list[str] = []
    fields: list[tuple[str, str | None, str]] = []

    for line in inspect.cleandoc(raw).splitlines():
        match = _FIELD_LINE.match(line)
        if match is not None:
            fields.append((match["name"], match["arg"], match["text"].strip()))
            continue
        if fields and line[:1].isspace() and line.strip():
            name, arg, text = fields[-1]
            fields[-1] = (name, arg, f"{text} {line.strip()}".strip())
            continue
        if fields and not line.strip():
            continue
        text_lines.append(line)

    tags: dict[str, list[str]] = {}
    param_tags: dict[str, str] = {}
    for name, arg, text in fields:
        if name in PARAM_TAGS and arg:
            param_tags.setdefault(arg.split()[-1], text)
            continue
        value = f"{arg} {text}".strip() if arg else text
        tags.setdefault(name, []).append(value)

    body = "\n".join(text_lines).strip()
    return DocComment(
        text=body,
        first_sentence=first_sentence(body),
        tags=tags,
        param_tags=param_tags,
    )


__all__ = ["first_sentence", "parse_docstring", "string_literal_value"]
