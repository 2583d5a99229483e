"""
Game title normalization for matching.

Deal posts and download listings decorate titles with repack tags and
edition suffixes that Steam's catalog doesn't use. Both the query and
every catalog name go through ``normalize_title`` before comparison.
"""

import re

REPACKERS = (
    "FitGirl",
    "DODI",
    "ElAmigos",
    "KaOs",
    "Xatab",
    r"R\.G\. Mechanics",
)

_REPACKER_GROUP = "|".join(REPACKERS)

REPACK_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\((?:{_REPACKER_GROUP})\s+Repack[^)]*\)", re.IGNORECASE),
    re.compile(rf"\[(?:{_REPACKER_GROUP})\s+Repack[^\]]*\]", re.IGNORECASE),
    re.compile(r"\(Repack\)", re.IGNORECASE),
    re.compile(r"\[Repack\]", re.IGNORECASE),
    re.compile(r"\s*-\s*Repack\s*$", re.IGNORECASE),
)

EDITION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bComplete Edition\b", re.IGNORECASE),
    re.compile(r"\bGOTY(?:\s+Edition)?\b", re.IGNORECASE),
    re.compile(r"\bGame of the Year(?:\s+Edition)?\b", re.IGNORECASE),
    re.compile(r"\bDefinitive Edition\b", re.IGNORECASE),
    re.compile(r"\bUltimate Edition\b", re.IGNORECASE),
    re.compile(r"\bDeluxe Edition\b", re.IGNORECASE),
    re.compile(r"\bPremium Edition\b", re.IGNORECASE),
    re.compile(r"\bEnhanced Edition\b", re.IGNORECASE),
    re.compile(r"\bRemastered\b", re.IGNORECASE),
    re.compile(r"\bRemake\b", re.IGNORECASE),
)

# Anything but letters, digits, whitespace, hyphens and apostrophes
_SPECIAL_CHARS = re.compile(r"[^\w\s'-]|_")
_WHITESPACE = re.compile(r"\s+")


def remove_repack_markers(title: str) -> str:
    """Remove repack markers like "(FitGirl Repack)" or "[Repack]"."""
    for pattern in REPACK_PATTERNS:
        title = pattern.sub("", title)
    return title


def remove_edition_suffixes(title: str) -> str:
    """Remove edition suffixes like "Complete Edition" or "GOTY"."""
    for pattern in EDITION_PATTERNS:
        title = pattern.sub("", title)
    return title


def normalize_title(title: str | None) -> str:
    """
    Normalize a game title for matching.

    Edition suffixes are removed before punctuation is stripped, since
    their patterns rely on word boundaries.

    Args:
        title: Raw game title

    Returns:
        str: Normalized lowercase title ("" for empty input)

    Example:
        >>> normalize_title("Cyberpunk 2077 (FitGirl Repack, Selective Download)")
        'cyberpunk 2077'
        >>> normalize_title("Grand Theft Auto V: Premium Edition")
        'grand theft auto v'
    """
    if not title:
        return ""

    normalized = remove_repack_markers(title)
    normalized = remove_edition_suffixes(normalized)
    normalized = _SPECIAL_CHARS.sub(" ", normalized)
    normalized = _WHITESPACE.sub(" ", normalized).strip().lower()
    return normalized.strip("- ")
