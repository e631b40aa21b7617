"""Run the HTTP API."""

import click
import structlog

logger = structlog.get_logger()


@click.command("serve")
@click.option("--host", default=None, help="Bind address (default from config)")
@click.option("--port", default=None, type=int, help="Port (default from config)")
@click.pass_obj
def serve(config, host, port):
    """Serve the habit API with uvicorn.

    While the server runs it owns the state database; use the HTTP API
    rather than `add`/`log` against the same database.
    """
    import uvicorn

    from web.app import create_app

    host = host or config.web.host
    port = port or config.web.port
    logger.info("serve.starting", host=host, port=port)
    # log_config=None keeps the structlog setup from the CLI group
    uvicorn.run(create_app(config), host=host, port=port, log_config=None)
