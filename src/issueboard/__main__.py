"""Run the issueboard server: ``python -m issueboard``."""

from __future__ import annotations

import click
import uvicorn

from issueboard import __version__
from issueboard.api import create_app
from issueboard.config import ConfigError, SessionMode, load_settings
from issueboard.logging import get_logger, setup_logging


@click.command()
@click.version_option(version=__version__, prog_name="issueboard")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", type=int, default=3333, show_default=True, help="Bind port")
@click.option(
    "--session-mode",
    type=click.Choice([mode.value for mode in SessionMode], case_sensitive=False),
    help="Override ISSUEBOARD_SESSION_MODE",
)
@click.option("--log-dir", help="Override ISSUEBOARD_LOG_DIR")
@click.option("--log-level", help="Override ISSUEBOARD_LOG_LEVEL")
def main(
    host: str,
    port: int,
    session_mode: str | None,
    log_dir: str | None,
    log_level: str | None,
) -> None:
    """Kanban board over GitHub issues, backed by column labels."""
    try:
        settings = load_settings(session_mode=session_mode, log_dir=log_dir, log_level=log_level)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(log_dir=settings.log_dir, level=settings.log_level)
    get_logger("server").info(
        "Serving on http://%s:%d (session mode=%s)", host, port, settings.session_mode
    )
    uvicorn.run(create_app(settings), host=host, port=port, log_level="warning")


if __name__ == "__main__":
    main()
