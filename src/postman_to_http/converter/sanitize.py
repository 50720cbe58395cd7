"""Filesystem-safe names for collection items, collections and environments."""

FORBIDDEN_CHARS = ':/\\?*<>|"'

_TRANSLATION = str.maketrans({ch: "_" for ch in FORBIDDEN_CHARS})


def sanitize_name(name: str) -> str:
    """Replace characters that are unsafe in path segments with ``_``.

    Everything else (spaces, unicode, leading or trailing dots) is kept.
    Distinct names may collapse to the same result; callers accept that
    the later file overwrites the earlier one.
    """
    return name.translate(_TRANSLATION)
