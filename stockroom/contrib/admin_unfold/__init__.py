"""Stockroom Admin with Unfold theme."""

# Lazy imports so that importing the package does not require unfold
# until the admin module itself is loaded.

__all__ = [
    "BaseModelAdmin",
    "format_quantity",
]


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name in ("BaseModelAdmin", "format_quantity"):
        from stockroom.contrib.admin_unfold import base
        return getattr(base, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
