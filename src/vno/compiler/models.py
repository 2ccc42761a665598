"""Data models shared by the compile pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

__all__ = [
    "BuildMetrics",
    "CompileContext",
    "ComponentRecord",
    "ComponentSections",
    "InstanceKind",
]


class InstanceKind(StrEnum):
    """Forms a component may take in the generated bundle."""

    ROOT = "root"
    NAMED = "named"


@dataclass(slots=True)
class ComponentRecord:
    """Parsed state of one component source file.

    Records start with ``label`` and ``path`` only. The compile loop fills the
    sections and instance while the record is dequeued; stored records are
    not mutated again.
    """

    label: str
    path: Path
    is_root: bool = False
    template: str | None = None
    script: str | None = None
    style: str | None = None
    instance: str | None = None
    extracted: bool = False

    @property
    def kind(self) -> InstanceKind:
        return InstanceKind.ROOT if self.is_root else InstanceKind.NAMED


@dataclass(frozen=True, slots=True)
class ComponentSections:
    """Normalized sections extracted from a component source."""

    template: str | None
    script: str | None
    style: str | None

    def apply(self, record: ComponentRecord) -> ComponentRecord:
        """Copy the sections onto ``record`` and return it."""

        record.template = self.template
        record.script = self.script
        record.style = self.style
        record.extracted = True
        return record


@dataclass(slots=True)
class CompileContext:
    """Compile-time state shared by every component of a build."""

    runtime: str = "Vue"
    root_label: str = "App"
    project_root: Path = field(default_factory=Path.cwd)


class BuildMetrics(BaseModel):
    """Counters describing the outcome of a build."""

    components_discovered: int = Field(default=0, ge=0)
    components_compiled: int = Field(default=0, ge=0)
    imports_seen: int = Field(default=0, ge=0)
    duplicates_skipped: int = Field(default=0, ge=0)
    bytes_written: int = Field(default=0, ge=0)

    model_config = {"validate_assignment": True}

    def record_discovered(self, count: int = 1) -> None:
        if count < 0:
            raise ValueError("count must be >= 0")
        self.components_discovered += count
