from howto_selectors.selector_transform import (
    ContainsClause,
    SelectorParseError,
    find_contains_clauses,
    has_legacy_pseudo,
    quote_text,
    transform_selector,
)

__all__ = [
    "ContainsClause",
    "SelectorParseError",
    "find_contains_clauses",
    "has_legacy_pseudo",
    "quote_text",
    "transform_selector",
]
