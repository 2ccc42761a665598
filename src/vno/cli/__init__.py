"""Command-line interface primitives for :mod:`vno`.

This module exposes the Typer application behind the ``vno`` console script
and wires the ``build`` and ``init`` commands into the compiler and config
helpers.

Example:
    >>> import typer
    >>> from vno.cli import create_app
    >>> app = create_app()
    >>> isinstance(app, typer.Typer)
    True
"""

from __future__ import annotations

from pathlib import Path

import typer

from vno.cli.build import build_cli_overrides, load_project_config, run_build
from vno.cli.init import ProjectConfigExistsError, init_project
from vno.compiler import BuildResult, CompilerError
from vno.core.logging import configure_logging, get_logger
from vno.core.paths import resolve_project

_app_help = (
    "Single-file-component compiler."
    "\n\n"
    "Use `vno build` to bundle a component tree into one JavaScript file."
)


def _emit_build_summary(result: BuildResult, *, cleaned: bool) -> None:
    """Print a human-friendly summary of a finished build."""

    store = result.store
    typer.secho("Build complete", fg=typer.colors.GREEN, bold=True)
    root = store.root
    if root is not None:
        typer.echo(f"  root: {root.label} ({root.path})")
    typer.echo(f"  components: {len(store)}")
    typer.echo(f"  output: {result.output_path}")
    if cleaned:
        typer.echo("  note: output directory reset before build")
    typer.echo("Components (emit order):")
    for record in reversed(store.records()):
        typer.echo(f"  - {record.label}: {record.kind.value}")


def create_app() -> "typer.Typer":
    """Return the Typer application powering the ``vno`` CLI.

    Returns:
        A configured Typer application ready to be invoked by ``vno``.
    """

    app = typer.Typer(
        help=_app_help,
        no_args_is_help=True,
        rich_markup_mode="rich",
        invoke_without_command=False,
        cls=typer.core.TyperGroup,
    )

    @app.callback()
    def main_callback() -> None:
        """Top-level CLI callback ensuring subcommands are dispatched."""

        return None

    @app.command(
        "build",
        help="Compile a component tree into a single bundle file.",
    )
    def build_command(  # noqa: PLR0913 - CLI surface area intentionally explicit
        entry: str | None = typer.Argument(
            None,
            help="Entry component path relative to the project root.",
        ),
        label: str | None = typer.Option(
            None,
            "--label",
            "-n",
            help="Label of the root component (defaults to App).",
        ),
        root: Path | None = typer.Option(
            None,
            "--root",
            "-r",
            help="Project root used to resolve imports (defaults to cwd).",
        ),
        config_file: Path | None = typer.Option(
            None,
            "--config",
            "-c",
            help="Path to a vno.toml file (defaults to <root>/vno.toml).",
        ),
        output_dir: str | None = typer.Option(
            None,
            "--out",
            "-o",
            help="Output directory relative to the project root.",
        ),
        output_file: str | None = typer.Option(
            None,
            "--file",
            help="Bundle file name inside the output directory.",
        ),
        runtime: str | None = typer.Option(
            None,
            "--runtime",
            help="Global identifier of the component runtime.",
        ),
        clean: bool | None = typer.Option(
            None,
            "--clean/--no-clean",
            help="Reset the output directory before building.",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            "-l",
            help="Override the logging level (DEBUG/INFO/WARNING/ERROR).",
        ),
    ) -> None:
        """Compile the component tree rooted at ``entry``."""

        project_root = root or Path.cwd()
        overrides = build_cli_overrides(
            label=label,
            entry=entry,
            output_dir=output_dir,
            output_file=output_file,
            runtime=runtime,
            clean=clean,
            log_level=log_level,
        )

        try:
            config = load_project_config(
                root=project_root,
                config_file=config_file,
                cli_overrides=overrides,
            )
            paths = resolve_project(
                root_override=project_root,
                settings=config.build,
            )
        except (ValueError, TypeError, OSError) as exc:
            typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED)
            raise typer.Exit(code=1) from exc

        configure_logging(level=config.log_level, log_dir=paths.logs_dir)
        logger = get_logger(__name__, command="build")

        try:
            result = run_build(config=config, paths=paths, logger=logger)
        except CompilerError as exc:
            logger.error(
                "build-failed",
                error=exc.reason,
                label=exc.label,
                path=str(exc.path) if exc.path is not None else None,
            )
            typer.secho(f"Build failed: {exc}", fg=typer.colors.RED)
            raise typer.Exit(code=1) from exc
        except ValueError as exc:
            typer.secho(f"Output error: {exc}", fg=typer.colors.RED)
            raise typer.Exit(code=1) from exc

        logger.info(
            "build-summary",
            components=len(result.store),
            output=str(result.output_path),
            metrics=result.metrics.model_dump(),
        )
        _emit_build_summary(result, cleaned=config.build.clean)

    @app.command(
        "init",
        help="Seed a vno.toml configuration file in the project root.",
    )
    def init_command(
        root: Path | None = typer.Option(
            None,
            "--root",
            "-r",
            help="Project root receiving vno.toml (defaults to cwd).",
        ),
        force: bool = typer.Option(
            False,
            "--force",
            "-f",
            help="Overwrite an existing vno.toml.",
        ),
        label: str | None = typer.Option(
            None,
            "--label",
            "-n",
            help="Label of the root component written to the config.",
        ),
        entry: str | None = typer.Option(
            None,
            "--entry",
            "-e",
            help="Entry component path written to the config.",
        ),
    ) -> None:
        """Write a commented ``vno.toml`` for the project."""

        overrides = build_cli_overrides(label=label, entry=entry)
        try:
            config, paths = init_project(
                root=root or Path.cwd(),
                force=force,
                cli_overrides=overrides,
            )
        except ProjectConfigExistsError as exc:
            typer.secho(
                f"Config already exists: {exc} (use --force to overwrite)",
                fg=typer.colors.YELLOW,
            )
            raise typer.Exit(code=1) from exc
        except (ValueError, OSError) as exc:
            typer.secho(f"Failed to initialize project: {exc}", fg=typer.colors.RED)
            raise typer.Exit(code=1) from exc

        typer.secho("Project initialized", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  config: {paths.config_file}")
        typer.echo(f"  entry: {config.build.root_label} ({config.build.entry})")
        typer.echo(f"  output: {paths.output_file}")

    return app


__all__ = ["create_app"]
