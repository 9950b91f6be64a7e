#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for the CloudNotes backend. All functionality is
accessible through command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action config
    python run.py --action render --input note.md --mode text
    python run.py --action color --existing "#3b82f6" --existing "#ef4444"
"""

import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from cloudnotes.backend.core.logging import get_logger, log_with_source, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "config", "render", "color", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
@click.option(
    "--input", "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Markdown file to render; stdin when omitted (for render action).",
)
@click.option(
    "--mode",
    type=click.Choice(["html", "text"]),
    default="html",
    help="Output format (for render action).",
)
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum text length (for render action in text mode).",
)
@click.option(
    "--existing",
    multiple=True,
    help="Color already in use; repeatable (for color action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    input_path: Path | None,
    mode: str,
    limit: int | None,
    existing: tuple[str, ...],
) -> None:
    """
    CloudNotes Entry Point.

    Run the application server, view configuration, render Markdown
    or generate a category color.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # View loaded configuration
        python run.py --action config

        # Preview a note as it appears in the note list
        python run.py --action render --input note.md --mode text

        # Suggest a color next to existing categories
        python run.py --action color --existing "#3b82f6"
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console", enable_file_logging=False)
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "config":
        show_config(logger)
    elif action == "render":
        render_markdown(logger, input_path, mode, limit)
    elif action == "color":
        generate_color(logger, existing)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI development server."""
    from cloudnotes.backend.core.config import get_server_address

    try:
        default_host, default_port = get_server_address()
    except Exception as e:
        logger.warning(
            "Could not load settings, using defaults",
            extra={"error": str(e)},
        )
        default_host, default_port = "127.0.0.1", 8000

    server_host = host or default_host
    server_port = port or default_port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "cloudnotes.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def _echo_section(values: dict, indent: int = 2) -> None:
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{' ' * indent}{key}:")
            _echo_section(value, indent + 2)
        else:
            click.echo(f"{' ' * indent}{key}: {value}")


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from cloudnotes.backend.core.config import get_app_config

        app_config = get_app_config()
        sections = [
            ("Application Settings", app_config.application),
            ("Database Settings", app_config.database),
            ("Logging Settings", app_config.logging),
            ("Feature Flags", app_config.features),
            ("Security Settings", app_config.security),
            ("Notes Settings", app_config.notes),
        ]

        for title, section in sections:
            click.echo(f"{title} (from YAML):")
            click.echo("-" * 40)
            _echo_section(section.model_dump())
            click.echo()

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def render_markdown(logger, input_path: Path | None, mode: str, limit: int | None) -> None:
    """Render a Markdown file (or stdin) as HTML or plain text."""
    from cloudnotes.backend.core.markdown import MarkdownPreviewRenderer

    if input_path is not None:
        source = input_path.read_text(encoding="utf-8")
    else:
        source = click.get_text_stream("stdin").read()

    renderer = MarkdownPreviewRenderer()
    if mode == "html":
        output = renderer.to_html(source)
    else:
        output = renderer.to_plain_text(source, limit=limit)

    log_with_source(logger, "cli", "debug", "Markdown rendered", mode=mode, chars=len(output))
    click.echo(output)


def generate_color(logger, existing: tuple[str, ...]) -> None:
    """Print a category color distinct from the given ones."""
    from cloudnotes.backend.core.colors import ColorAssigner, is_hex_color

    ignored = [color for color in existing if not is_hex_color(color)]
    if ignored:
        logger.warning("Ignoring malformed colors", extra={"colors": ignored})

    color = ColorAssigner().assign(existing)
    log_with_source(logger, "cli", "debug", "Color generated", color=color, existing=len(existing))
    click.echo(color)


def show_info(logger) -> None:
    """Display application information."""
    click.echo("CloudNotes Backend")
    click.echo("=" * 40)

    try:
        from cloudnotes.backend.core.config import get_app_config
        app_settings = get_app_config().application
        click.echo(f"Name: {app_settings.name}")
        click.echo(f"Version: {app_settings.version}")
        click.echo(f"Description: {app_settings.description}")
    except Exception:
        click.echo("Name: CloudNotes")
        click.echo("Version: 0.1.0")

    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the development server")
    click.echo("  --action config   Display configuration")
    click.echo("  --action render   Render Markdown (--input, --mode html|text)")
    click.echo("  --action color    Generate a category color (--existing)")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")
    click.echo()
    click.echo("Examples:")
    click.echo("  python run.py --action server --reload --verbose")
    click.echo("  python run.py --action render --input note.md --mode text")
    click.echo("  python run.py --action color --existing '#3b82f6'")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
