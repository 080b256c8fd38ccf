"""Typed path parameter converters.

Built-in converters for route pattern segments like ``{id:int}``.
Matched values are returned as strings; the converter only decides
what a segment may look like.
"""


# regex_pattern for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}
