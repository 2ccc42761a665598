"""Domain-specific exceptions raised while compiling components."""

from __future__ import annotations

from pathlib import Path


class CompilerError(RuntimeError):
    """Base error for compile failures; every subclass aborts the build."""

    def __init__(
        self,
        message: str,
        *,
        label: str | None = None,
        path: Path | str | None = None,
    ) -> None:
        self.label = label
        self.path = Path(path) if path is not None else None
        self.reason = message
        super().__init__(self._format(message))

    def _format(self, message: str) -> str:
        context = []
        if self.label is not None:
            context.append(f"component={self.label!r}")
        if self.path is not None:
            context.append(f"path={self.path}")
        if not context:
            return message
        return f"{message} ({', '.join(context)})"


class MissingSectionError(CompilerError):
    """Raised when a component lacks a required section tag."""

    def __init__(
        self,
        section: str,
        *,
        label: str | None = None,
        path: Path | str | None = None,
    ) -> None:
        self.section = section
        super().__init__(
            f"Missing <{section}> section",
            label=label,
            path=path,
        )


class MalformedSectionError(CompilerError):
    """Raised when a section body cannot be isolated."""

    def __init__(
        self,
        section: str,
        detail: str,
        *,
        label: str | None = None,
        path: Path | str | None = None,
    ) -> None:
        self.section = section
        super().__init__(
            f"Malformed <{section}> section: {detail}",
            label=label,
            path=path,
        )


class MalformedImportError(CompilerError):
    """Raised when an import declaration has no usable binding or path."""

    def __init__(
        self,
        line: str,
        *,
        line_number: int,
        label: str | None = None,
        path: Path | str | None = None,
    ) -> None:
        self.line = line
        self.line_number = line_number
        super().__init__(
            f"Malformed import on line {line_number}: {line.strip()!r}",
            label=label,
            path=path,
        )


class UnreadableSourceError(CompilerError):
    """Raised when a component source file cannot be read."""


class OutputWriteError(CompilerError):
    """Raised when the bundle cannot be written."""


__all__ = [
    "CompilerError",
    "MissingSectionError",
    "MalformedSectionError",
    "MalformedImportError",
    "UnreadableSourceError",
    "OutputWriteError",
]
