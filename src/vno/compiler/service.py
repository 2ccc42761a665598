"""Compiler service driving the discover, extract and emit pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from vno.core.config import BuildSettings, VnoConfig
from vno.core.logging import Logger, get_logger

from .emitter import Emitter
from .errors import UnreadableSourceError
from .imports import resolve_imports, scan_imports
from .instance import render_instance
from .models import BuildMetrics, CompileContext, ComponentRecord
from .sections import extract_sections
from .store import ComponentStore
from .worklist import Worklist

__all__ = [
    "BuildResult",
    "CompilerService",
    "read_source",
]


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of a completed build."""

    store: ComponentStore
    output_path: Path
    metrics: BuildMetrics


def read_source(record: ComponentRecord) -> str:
    """Read the UTF-8 source of ``record``.

    Raises:
        UnreadableSourceError: If the file is missing, unreadable, or not
            valid UTF-8.
    """

    try:
        return record.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableSourceError(
            f"Failed to read component source: {exc}",
            label=record.label,
            path=record.path,
        ) from exc


class CompilerService:
    """Facade compiling a component tree into a single bundle.

    Each call to :meth:`parse` or :meth:`compile` builds its own worklist and
    store, so a service instance can be reused across builds.
    """

    def __init__(
        self,
        *,
        project_root: Path | None = None,
        settings: BuildSettings | None = None,
        config: VnoConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        if settings is None:
            settings = config.build if config is not None else BuildSettings()
        self._settings = settings
        self._root = (project_root or Path.cwd()).resolve(strict=False)
        self._logger = logger or get_logger(
            __name__,
            component="compiler-service",
        )
        self._metrics = BuildMetrics()

    @property
    def settings(self) -> BuildSettings:
        return self._settings

    @property
    def project_root(self) -> Path:
        return self._root

    @property
    def metrics(self) -> BuildMetrics:
        """Return the counters of the most recent build."""

        return self._metrics

    def root_record(
        self,
        label: str | None = None,
        path: Path | str | None = None,
    ) -> ComponentRecord:
        """Return the root descriptor, defaulting to the configured entry."""

        entry = Path(path if path is not None else self._settings.entry)
        if not entry.is_absolute():
            entry = self._root / entry
        return ComponentRecord(
            label=label or self._settings.root_label,
            path=entry,
            is_root=True,
        )

    def parse(
        self,
        label: str | None = None,
        path: Path | str | None = None,
    ) -> ComponentStore:
        """Compile every component reachable from the root descriptor.

        Returns:
            The store holding each finalized component in discovery order.

        Raises:
            CompilerError: On the first unreadable or malformed component.
        """

        root = self.root_record(label, path)
        context = CompileContext(
            runtime=self._settings.runtime,
            root_label=root.label,
            project_root=self._root,
        )
        store = ComponentStore(context)
        store.root = root
        worklist = Worklist([root])

        self._metrics = BuildMetrics(components_discovered=1)
        logger = self._logger.bind(root=context.root_label)

        while worklist:
            current = worklist.pop()
            logger.debug(
                "component-dequeued",
                label=current.label,
                path=str(current.path),
                pending=len(worklist),
            )
            self._compile_component(current, store, worklist, logger)
            store.put(current.label, current)
            self._metrics.components_compiled += 1

        logger.info(
            "parse-complete",
            components=len(store),
            imports=self._metrics.imports_seen,
            duplicates=self._metrics.duplicates_skipped,
        )
        return store

    def _compile_component(
        self,
        record: ComponentRecord,
        store: ComponentStore,
        worklist: Worklist,
        logger: Logger,
    ) -> None:
        source = read_source(record)
        context = store.context

        sections = extract_sections(
            source,
            optional=self._settings.optional_sections,
            label=record.label,
            path=record.path,
        )
        sections.apply(record)
        record.instance = render_instance(
            record,
            runtime=context.runtime,
        )

        known = {**store.paths(), **worklist.paths(), record.label: record.path}
        discovered = resolve_imports(
            source,
            known,
            root=context.project_root,
            label=record.label,
            path=record.path,
            logger=logger,
        )
        for declaration in discovered:
            worklist.push(
                ComponentRecord(label=declaration.label, path=declaration.path)
            )

        self._metrics.record_discovered(len(discovered))
        imports_seen = len(scan_imports(source, root=context.project_root))
        self._metrics.imports_seen += imports_seen
        self._metrics.duplicates_skipped += imports_seen - len(discovered)

        logger.debug(
            "imports-resolved",
            label=record.label,
            discovered=[item.label for item in discovered],
        )
        logger.info(
            "component-compiled",
            label=record.label,
            path=str(record.path),
            kind=record.kind.value,
        )

    def build(self, store: ComponentStore, *, output_dir: Path | None = None) -> Path:
        """Emit the components of ``store`` into the bundle file."""

        emitter = Emitter(
            output_dir=output_dir or self._root / self._settings.output_dir,
            output_file=self._settings.output_file,
            logger=self._logger.bind(component="emitter"),
        )
        output_path = emitter.build(store)
        self._metrics.bytes_written = emitter.bytes_written
        return output_path

    def compile(
        self,
        label: str | None = None,
        path: Path | str | None = None,
        *,
        output_dir: Path | None = None,
    ) -> BuildResult:
        """Parse the component tree and emit the bundle."""

        store = self.parse(label, path)
        output_path = self.build(store, output_dir=output_dir)
        self._logger.info(
            "build-complete",
            components=len(store),
            output=str(output_path),
        )
        return BuildResult(
            store=store,
            output_path=output_path,
            metrics=self._metrics.model_copy(),
        )

