"""Import discovery for component sources."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Collection

from vno.core.logging import Logger

from .errors import MalformedImportError

__all__ = [
    "ImportDeclaration",
    "locate",
    "resolve_imports",
    "scan_imports",
]

_IMPORT_KEYWORD = "import"
_QUOTED = re.compile(r"""[`'"]([^`'"]*)[`'"]""")


@dataclass(frozen=True, slots=True)
class ImportDeclaration:
    """A component referenced by an import line."""

    label: str
    path: Path
    specifier: str
    line_number: int


def locate(relative: str, *, root: Path) -> Path:
    """Resolve ``relative`` against the project ``root``.

    Imports are always interpreted from the project root, never from the
    directory of the importing file.

    Example:
        >>> from pathlib import Path
        >>> locate("./components/Nav.vue", root=Path("/srv/app")).as_posix()
        '/srv/app/components/Nav.vue'
    """

    return Path(os.path.normpath(root / relative))


def scan_imports(
    source: str,
    *,
    root: Path,
    label: str | None = None,
    path: Path | None = None,
) -> list[ImportDeclaration]:
    """Return every import declaration in ``source`` in line order.

    ``label`` and ``path`` identify the importing component in error messages.

    Raises:
        MalformedImportError: If an import line lacks a binding or a quoted
            module path.
    """

    declarations: list[ImportDeclaration] = []
    for number, line in enumerate(source.splitlines(), start=1):
        tokens = line.split()
        if not tokens or tokens[0] != _IMPORT_KEYWORD:
            continue
        if len(tokens) < 3:
            raise MalformedImportError(
                line, line_number=number, label=label, path=path
            )
        match = _QUOTED.search(tokens[-1])
        if match is None or not match.group(1):
            raise MalformedImportError(
                line, line_number=number, label=label, path=path
            )
        specifier = match.group(1)
        declarations.append(
            ImportDeclaration(
                label=tokens[1],
                path=locate(specifier, root=root),
                specifier=specifier,
                line_number=number,
            )
        )
    return declarations


def resolve_imports(
    source: str,
    known_labels: Collection[str] | Mapping[str, Path],
    *,
    root: Path,
    label: str | None = None,
    path: Path | None = None,
    logger: Logger | None = None,
) -> list[ImportDeclaration]:
    """Return the imports of ``source`` whose labels are not yet known.

    ``known_labels`` holds the labels currently queued or finalized. Label,
    not path, identifies a component: the first discovery of a label wins and
    later imports of the same label are dropped. When ``known_labels`` maps
    labels to paths, dropping an import whose path differs from the known one
    is reported as a ``duplicate-label`` warning.

    Example:
        >>> from pathlib import Path
        >>> found = resolve_imports(
        ...     "import Child from './Child.vue'", set(), root=Path("/app")
        ... )
        >>> [(item.label, item.path.as_posix()) for item in found]
        [('Child', '/app/Child.vue')]
    """

    known_paths = known_labels if isinstance(known_labels, Mapping) else {}
    seen: dict[str, Path] = {}
    discovered: list[ImportDeclaration] = []

    for declaration in scan_imports(source, root=root, label=label, path=path):
        if declaration.label in known_labels:
            previous = known_paths.get(declaration.label)
        elif declaration.label in seen:
            previous = seen[declaration.label]
        else:
            seen[declaration.label] = declaration.path
            discovered.append(declaration)
            continue

        if (
            logger is not None
            and previous is not None
            and previous != declaration.path
        ):
            logger.warning(
                "duplicate-label",
                label=declaration.label,
                kept=str(previous),
                ignored=str(declaration.path),
                importer=str(path) if path is not None else None,
            )

    return discovered
