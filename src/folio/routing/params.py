"""Path parameter patterns.

Built-in converters for route path segments like ``{issue_number:int}``.
Captured values stay strings; converters only decide what a segment
may look like.
"""

# Regex pattern for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "path": r".+",
}


def pattern_for(param_type: str) -> str:
    """Return the regex pattern for *param_type*.

    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    return CONVERTERS[param_type]
