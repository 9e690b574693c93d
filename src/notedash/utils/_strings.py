from collections.abc import Iterable, Sequence


def split_csv(value: str | Sequence[str] | None, separator: str = ",") -> list[str]:
    """Split a comma-separated setting into trimmed, non-empty terms.

    Lists are accepted as-is (trimmed), so settings stored either way work.

    Examples:
        >>> split_csv(" Home, NotePlan ,,")
        ['Home', 'NotePlan']
        >>> split_csv("")
        []
    """
    if not value:
        return []
    parts = value.split(separator) if isinstance(value, str) else value
    return [part.strip() for part in parts if part.strip()]


def is_line_disallowed_by_terms(line: str, terms: str | Iterable[str]) -> bool:
    """Check whether a line contains any of the excluded terms.

    Matching is a case-sensitive substring test.

    Args:
        line: Paragraph content.
        terms: Comma-separated string or iterable of terms.

    Returns:
        True if any term occurs in the line.
    """
    term_list = split_csv(terms) if isinstance(terms, str) else [t for t in terms if t]
    return any(term in line for term in term_list)
