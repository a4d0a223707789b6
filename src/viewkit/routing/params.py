"""Path parameter converters for route segments like ``{id:int}``.

Converters only constrain what a segment matches; captured values are
handed to handlers as strings.
"""

CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".*",
}
