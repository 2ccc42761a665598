"""Write compiled components into the bundle file."""

from __future__ import annotations

from pathlib import Path

from vno.core.logging import Logger, get_logger

from .errors import CompilerError, OutputWriteError
from .store import ComponentStore

__all__ = ["Emitter"]


class Emitter:
    """Append component instances to a single bundle file.

    Components are written in reverse finalization order so that imported
    components are registered before the components that use them. The
    bundle is opened in append mode and never truncated here; resetting the
    output directory is the caller's job.
    """

    def __init__(
        self,
        *,
        output_dir: Path,
        output_file: str = "build.js",
        logger: Logger | None = None,
    ) -> None:
        self._output_dir = output_dir
        self._output_path = output_dir / output_file
        self._logger = logger or get_logger(__name__, component="emitter")
        self._bytes_written = 0

    @property
    def output_path(self) -> Path:
        return self._output_path

    @property
    def bytes_written(self) -> int:
        """Return the number of bytes appended by the last :meth:`build`."""

        return self._bytes_written

    def build(self, store: ComponentStore) -> Path:
        """Append every stored instance to the bundle and return its path.

        Raises:
            CompilerError: If a stored record has no generated instance.
            OutputWriteError: If the directory or file cannot be written.
                Content appended before the failure is left in place.
        """

        ordered = list(reversed(store.records()))
        for record in ordered:
            if record.instance is None:
                raise CompilerError(
                    "Component has no generated instance",
                    label=record.label,
                    path=record.path,
                )

        self._bytes_written = 0
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            with self._output_path.open("ab") as bundle:
                for record in ordered:
                    self._bytes_written += bundle.write(
                        record.instance.encode("utf-8")
                    )
        except OSError as exc:
            self._logger.error(
                "output-write-failed",
                path=str(self._output_path),
                error=str(exc),
            )
            raise OutputWriteError(
                f"Failed to write bundle: {exc}",
                path=self._output_path,
            ) from exc

        self._logger.info(
            "output-written",
            path=str(self._output_path),
            components=len(ordered),
            bytes=self._bytes_written,
        )
        return self._output_path
