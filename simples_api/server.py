"""Process entry point: run the API under uvicorn."""

import logging
import signal
import sys
from types import FrameType

import uvicorn
from pydantic import ValidationError

from simples_api.config import Settings, get_settings
from simples_api.utils.logging import setup_logging

logger = logging.getLogger(__name__)


class GracefulServer(uvicorn.Server):
    """uvicorn server that logs which termination signal stopped it.

    uvicorn installs the SIGINT/SIGTERM handlers itself; on either signal it
    stops accepting connections and runs the lifespan shutdown, which
    disposes the database pool.
    """

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        if not self.should_exit:
            logger.info("%s received, shutting down gracefully", signal.Signals(sig).name)
        super().handle_exit(sig, frame)


def _exit_cleanly(_sig: int, _frame: FrameType | None) -> None:
    raise SystemExit(0)


def install_exit_handlers() -> None:
    """Make SIGINT/SIGTERM end the process with status 0.

    uvicorn re-delivers the signal it caught to the previously installed
    handler once shutdown has finished; without this the process would die
    from the re-delivered signal instead of exiting cleanly.
    """
    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _exit_cleanly)


def build_server(settings: Settings) -> GracefulServer:
    """Create the uvicorn server bound to ``settings.host:settings.port``."""
    config = uvicorn.Config(
        "simples_api.main:app",
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_config=None,
        access_log=settings.debug,
    )
    return GracefulServer(config)


def main() -> int:
    """Validate configuration, then serve until a termination signal arrives."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.error("Invalid configuration:\n%s", exc)
        return 2

    setup_logging(settings.log_level, settings.log_format)

    logger.info("API server running on port %s", settings.port)
    logger.info("Health check: http://localhost:%s/health", settings.port)
    logger.info(
        "API endpoint: http://localhost:%s/simples/system/{mapId}/{systemId}", settings.port
    )

    install_exit_handlers()
    server = build_server(settings)
    server.run()
    if not server.started:
        logger.error("Server failed to start")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
