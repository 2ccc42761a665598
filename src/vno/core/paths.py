"""Project path helpers for :mod:`vno`."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .config import USER_CONFIG_FILENAME, BuildSettings

__all__ = [
    "ProjectPaths",
    "resolve_project",
    "reset_output_dir",
]


@dataclass(frozen=True, slots=True)
class ProjectPaths:
    """Resolved locations for a component project.

    Example:
        >>> from pathlib import Path
        >>> paths = ProjectPaths(
        ...     root=Path("/tmp/app"),
        ...     config_file=Path("/tmp/app/vno.toml"),
        ...     output_dir=Path("/tmp/app/vno-build"),
        ...     output_file=Path("/tmp/app/vno-build/build.js"),
        ...     logs_dir=Path("/tmp/app/.vno/logs"),
        ... )
        >>> paths.output_file.name
        'build.js'
    """

    root: Path
    config_file: Path
    output_dir: Path
    output_file: Path
    logs_dir: Path

    def iter_all(self) -> Iterable[Path]:
        """Yield every path managed within the project."""

        yield from (
            self.root,
            self.config_file,
            self.output_dir,
            self.output_file,
            self.logs_dir,
        )

    def entry_path(self, entry: str | Path) -> Path:
        """Return the absolute path of an entry component."""

        candidate = Path(entry).expanduser()
        if candidate.is_absolute():
            return candidate
        return self.root / candidate


def _normalize(candidate: Path) -> Path:
    raw = Path(candidate).expanduser()
    if raw.is_absolute():
        return raw.resolve(strict=False)
    return (Path.cwd() / raw).resolve(strict=False)


def resolve_project(
    *,
    root_override: Path | None = None,
    settings: BuildSettings | None = None,
) -> ProjectPaths:
    """Resolve canonical project locations.

    Args:
        root_override: Optional project root; defaults to the working directory.
        settings: Build settings naming the output directory and file.

    Returns:
        Resolved project paths.

    Raises:
        ValueError: If the resolved root points to a regular file.
    """

    settings = settings or BuildSettings()
    root = _normalize(root_override or Path.cwd())

    if root.exists() and root.is_file():
        raise ValueError(f"Project root must be a directory: {root}")

    output_dir = root / settings.output_dir
    return ProjectPaths(
        root=root,
        config_file=root / USER_CONFIG_FILENAME,
        output_dir=output_dir,
        output_file=output_dir / settings.output_file,
        logs_dir=root / ".vno" / "logs",
    )


def reset_output_dir(paths: ProjectPaths) -> Path:
    """Remove previous build output and recreate an empty output directory.

    Builds append to the bundle file, so callers reset the directory before
    compiling when a fresh artifact is required.

    Raises:
        ValueError: If the output directory is the project root, one of its
            ancestors, or a regular file.
    """

    output_dir = paths.output_dir
    resolved = output_dir.resolve(strict=False)
    if paths.root.resolve(strict=False).is_relative_to(resolved):
        raise ValueError(
            f"Refusing to reset '{resolved}': it contains the project root."
        )
    if output_dir.exists():
        if not output_dir.is_dir():
            raise ValueError(
                f"Output path '{output_dir}' exists but is not a directory."
            )
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir
