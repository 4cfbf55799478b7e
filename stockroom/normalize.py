"""
Catalog normalization — pure string transforms.

Free-text brand/category/name values are typed by hand on a phone, so the
same product shows up as "spring  bed", "Spring Bed" and " SPRING BED".
Two forms are used:

    norm("  spring   bed ")    # "SPRING BED"   (comparison form)
    pretty("  spring   bed ")  # "Spring Bed"   (display form)
"""

import re

_WHITESPACE = re.compile(r"\s+")
_WORD_START = re.compile(r"\b([a-z])", re.IGNORECASE)


def _collapse(value) -> str:
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value).strip())


def norm(value) -> str:
    """Trim, collapse internal whitespace and upper-case. None -> ''."""
    return _collapse(value).upper()


norm_brand = norm
norm_category = norm
norm_name = norm


def pretty(value) -> str:
    """Trim, collapse whitespace and capitalise the first letter of each word."""
    return _WORD_START.sub(lambda m: m.group(1).upper(), _collapse(value))


def match_key(name, category, brand, sizes) -> str:
    """Comparison key used to detect duplicate catalog entries."""
    return "|".join(norm(part) for part in (name, category, brand, sizes))


def split_list(value) -> list[str]:
    """
    Split comma-separated text into trimmed, non-empty items.

    Lists pass through with the same cleanup.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [_collapse(item) for item in value if _collapse(item)]
