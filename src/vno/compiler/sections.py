"""Section extraction for single-file components.

Each extractor scans the raw source for the first tag matching a loose
pattern (``<template>``, ``< /template >``, ``<script lang="js">`` ...). The
section body runs up to the next tag of the same name, which is normally the
closing tag, or to the end of the file when no further tag follows. Nesting is
not tracked, so a file carries at most one tag pair per section.

Bodies are minified by removing whitespace:

* templates drop newlines and runs of two or more whitespace characters;
* scripts and styles drop every whitespace character.

Both normalizations are idempotent. Scripts are further reduced to the body of
their exported object literal.

Example:
    >>> source = "<template>\\n  <p>Hi</p>\\n</template>"
    >>> extract_template(source)
    '<p>Hi</p>'
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Collection

from .errors import MalformedSectionError, MissingSectionError
from .models import ComponentSections

__all__ = [
    "extract_sections",
    "extract_script",
    "extract_style",
    "extract_template",
    "normalize_script",
    "normalize_template",
    "section_body",
]

_TEMPLATE_WHITESPACE = re.compile(r"\n|\s{2,}")
_ANY_WHITESPACE = re.compile(r"\s")


@lru_cache(maxsize=None)
def _tag_pattern(section: str) -> re.Pattern[str]:
    return re.compile(rf"<\W*{re.escape(section)}(?:\s[^>]*)?>")


def section_body(
    source: str,
    section: str,
    *,
    label: str | None = None,
    path: Path | None = None,
) -> str:
    """Return the raw text following the first ``section`` tag.

    Raises:
        MissingSectionError: If no tag for ``section`` is present.
    """

    pattern = _tag_pattern(section)
    opening = pattern.search(source)
    if opening is None:
        raise MissingSectionError(section, label=label, path=path)

    closing = pattern.search(source, opening.end())
    end = closing.start() if closing is not None else len(source)
    return source[opening.end():end]


def normalize_template(text: str) -> str:
    """Drop newlines and whitespace runs from template markup."""

    return _TEMPLATE_WHITESPACE.sub("", text)


def normalize_script(text: str) -> str:
    """Drop every whitespace character from script or style text."""

    return _ANY_WHITESPACE.sub("", text)


def _object_body(
    script: str,
    *,
    label: str | None,
    path: Path | None,
) -> str:
    start = script.find("{")
    end = script.rfind("}")
    if start < 0:
        raise MalformedSectionError(
            "script",
            "no opening brace",
            label=label,
            path=path,
        )
    if end < start:
        raise MalformedSectionError(
            "script",
            "closing brace precedes opening brace",
            label=label,
            path=path,
        )
    return script[start + 1:end]


def extract_template(
    source: str,
    *,
    label: str | None = None,
    path: Path | None = None,
) -> str:
    """Return the minified ``<template>`` body of ``source``."""

    body = section_body(source, "template", label=label, path=path)
    return normalize_template(body)


def extract_script(
    source: str,
    *,
    label: str | None = None,
    path: Path | None = None,
) -> str:
    """Return the object-literal body of the ``<script>`` section.

    Example:
        >>> extract_script("<script>export default { name: 'x' }</script>")
        "name:'x'"

    Raises:
        MissingSectionError: If the file has no ``<script>`` tag.
        MalformedSectionError: If the object-literal braces cannot be found.
    """

    body = section_body(source, "script", label=label, path=path)
    return _object_body(normalize_script(body), label=label, path=path)


def extract_style(
    source: str,
    *,
    label: str | None = None,
    path: Path | None = None,
) -> str:
    """Return the minified ``<style>`` body of ``source``."""

    body = section_body(source, "style", label=label, path=path)
    return normalize_script(body)


_EXTRACTORS = {
    "template": extract_template,
    "script": extract_script,
    "style": extract_style,
}


def extract_sections(
    source: str,
    *,
    optional: Collection[str] = (),
    label: str | None = None,
    path: Path | None = None,
) -> ComponentSections:
    """Run every extractor over ``source``.

    Sections listed in ``optional`` resolve to ``None`` when their tag is
    absent; any other missing section raises :class:`MissingSectionError`.
    """

    values: dict[str, str | None] = {}
    for section, extractor in _EXTRACTORS.items():
        try:
            values[section] = extractor(source, label=label, path=path)
        except MissingSectionError:
            if section not in optional:
                raise
            values[section] = None
    return ComponentSections(**values)
