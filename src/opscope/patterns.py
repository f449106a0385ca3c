"""URL prefix patterns.

Operation URLs are literal path prefixes with an optional trailing
wildcard marker::

    "/v1/analytics/dashboards/**"  -> prefix "/v1/analytics/dashboards/"
    "/v1/analytics/export"         -> prefix "/v1/analytics/export"

Matching is a case-sensitive ``str.startswith`` on the prefix. No regex,
no path parameters.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UrlPrefix:
    """A compiled URL pattern: the original text and its literal prefix."""

    pattern: str
    prefix: str

    def matches(self, path: str) -> bool:
        return path.startswith(self.prefix)


def compile_pattern(pattern: str, wildcard: str = "**") -> UrlPrefix:
    """Compile a URL pattern into its literal prefix.

    The wildcard marker is only meaningful at the end of the pattern; a
    bare trailing ``*`` is accepted as a marker too. Anywhere else the
    characters are matched literally.

    Raises ``ValueError`` for a non-string pattern, and for a pattern
    with no literal prefix (``""``, ``"**"``), which would match every path.
    """
    if not isinstance(pattern, str):
        msg = f"URL pattern must be a string, got {type(pattern).__name__}"
        raise ValueError(msg)

    if pattern.endswith(wildcard):
        prefix = pattern[: -len(wildcard)]
    elif pattern.endswith("*"):
        prefix = pattern.rstrip("*")
    else:
        prefix = pattern

    if not prefix:
        msg = f"URL pattern {pattern!r} has no literal prefix"
        raise ValueError(msg)
    return UrlPrefix(pattern=pattern, prefix=prefix)
