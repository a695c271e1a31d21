"""Rewrite jQuery-style ``:contains(...)`` clauses into Playwright selectors.

Selectors authored in step files (or returned by a model) often use the
jQuery ``:contains("text")`` pseudo-class, which is not valid CSS and which
Playwright rejects. Playwright offers two equivalents:

* ``tag:has-text("text")`` when any selector text precedes the clause
* ``text="text"`` when the clause opens the selector

The rewrite is purely syntactic. Anything that does not contain a
``:contains(`` clause is returned untouched, and a clause that cannot be
parsed leaves the whole selector untouched unless ``strict`` is requested.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

logger = logging.getLogger(__name__)

CONTAINS_TOKEN = ":contains("
QUOTE_CHARS = ("'", '"')


class SelectorParseError(ValueError):
    """A ``:contains(`` clause whose argument could not be parsed."""

    def __init__(self, selector: str, position: int, reason: str):
        self.selector = selector
        self.position = position
        self.reason = reason
        super().__init__(f"{reason} at position {position} in selector {selector!r}")


@dataclass(frozen=True)
class ContainsClause:
    start: int
    end: int
    text: str
    quote: str


def quote_text(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _skip_string(selector: str, pos: int) -> int:
    # Strings outside a clause (attribute values) may carry backslash escapes.
    quote = selector[pos]
    pos += 1
    while pos < len(selector):
        char = selector[pos]
        if char == "\\":
            pos += 2
            continue
        if char == quote:
            return pos + 1
        pos += 1
    return len(selector)


def _next_token(selector: str, pos: int) -> int:
    while pos < len(selector):
        if selector[pos] in QUOTE_CHARS:
            pos = _skip_string(selector, pos)
            continue
        if selector.startswith(CONTAINS_TOKEN, pos):
            return pos
        pos += 1
    return -1


def _skip_whitespace(selector: str, pos: int) -> int:
    while pos < len(selector) and selector[pos].isspace():
        pos += 1
    return pos


def _read_argument(selector: str, pos: int) -> Tuple[str, int]:
    """Read a quoted literal starting at ``pos``; no escapes are interpreted."""
    quote = selector[pos]
    close = selector.find(quote, pos + 1)
    if close == -1:
        raise SelectorParseError(selector, pos, "Unterminated quoted argument")
    return selector[pos + 1 : close], close + 1


def _parse_clause(selector: str, start: int) -> ContainsClause:
    pos = _skip_whitespace(selector, start + len(CONTAINS_TOKEN))
    if pos >= len(selector) or selector[pos] not in QUOTE_CHARS:
        raise SelectorParseError(selector, pos, "Expected a quoted argument")

    quote = selector[pos]
    text, pos = _read_argument(selector, pos)
    pos = _skip_whitespace(selector, pos)
    if pos >= len(selector) or selector[pos] != ")":
        raise SelectorParseError(selector, pos, "Missing closing parenthesis")

    return ContainsClause(start=start, end=pos + 1, text=text, quote=quote)


def find_contains_clauses(selector: str) -> List[ContainsClause]:
    """Locate every ``:contains(...)`` clause outside of quoted strings.

    Raises:
        SelectorParseError: if any clause is malformed.
    """
    clauses: List[ContainsClause] = []
    pos = _next_token(selector, 0)
    while pos != -1:
        clause = _parse_clause(selector, pos)
        clauses.append(clause)
        pos = _next_token(selector, clause.end)
    return clauses


def has_legacy_pseudo(selector: str) -> bool:
    return bool(selector) and _next_token(selector, 0) != -1


def transform_selector(selector: str, strict: bool = False) -> str:
    """Translate legacy ``:contains()`` clauses to the Playwright dialect.

    Args:
        selector: Selector expression as authored.
        strict: Raise instead of passing a malformed selector through.

    Returns:
        The rewritten selector, or ``selector`` itself when it has nothing to
        rewrite or (in non-strict mode) cannot be parsed.

    Raises:
        SelectorParseError: in strict mode, for a malformed clause.
    """
    if not selector:
        return selector

    try:
        clauses = find_contains_clauses(selector)
    except SelectorParseError as e:
        if strict:
            raise
        logger.warning(f"Leaving selector unchanged: {e}")
        return selector

    if not clauses:
        return selector

    parts = []
    cursor = 0
    for clause in clauses:
        parts.append(selector[cursor : clause.start])
        # The prefix is everything before the clause, copied verbatim.
        if clause.start == 0:
            parts.append(f"text={quote_text(clause.text)}")
        else:
            parts.append(f":has-text({quote_text(clause.text)})")
        cursor = clause.end
    parts.append(selector[cursor:])
    return "".join(parts)
