"""Utilities for exercise name normalization and lookup."""

from ..errors import ValidationError


def normalize_exercise_name(name: str) -> str:
    """Normalize an exercise name to its canonical display form.

    Strips surrounding whitespace, lowercases, then capitalizes each
    space-separated token ("  bench PRESS " -> "Bench Press"). Runs of
    spaces are kept as-is and acronyms are not special-cased, so
    "ohp" becomes "Ohp".
    """
    tokens = name.strip().lower().split(" ")
    return " ".join(token.capitalize() for token in tokens)


def require_exercise_name(name: str) -> str:
    """Normalize a name and reject it if nothing is left.

    Raises:
        ValidationError: If the name is empty or whitespace-only
    """
    normalized = normalize_exercise_name(name)
    if not normalized.strip():
        raise ValidationError("Exercise name cannot be empty")
    return normalized


def exercise_suggestions(library: list[str], text: str, limit: int = 10) -> list[str]:
    """Suggest library names for a partially typed exercise name.

    Args:
        library: Known exercise names, in display order
        text: What the user has typed so far
        limit: Maximum number of suggestions

    Returns:
        Names containing the text (case-insensitive), or the first
        names of the library when the text is blank
    """
    if not text.strip():
        return library[:limit]

    needle = text.lower()
    return [name for name in library if needle in name.lower()][:limit]


def dedupe_exercise_names(names: list[str]) -> list[str]:
    """Collapse names that share a canonical form, keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for name in names:
        normalized = normalize_exercise_name(name)
        if not normalized.strip() or normalized in seen:
            continue
        seen.add(normalized)
        result.append(normalized)
    return result
