"""LIKE patterns for case-insensitive name search."""


def contains_pattern(query: str) -> str:
    """Lower-cased substring pattern; %, _ and / in query match literally.

    Use with ``LIKE %s ESCAPE '/'``.
    """
    escaped = query.lower().replace("/", "//").replace("%", "/%").replace("_", "/_")
    return f"%{escaped}%"
