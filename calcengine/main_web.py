"""calcengine Web Server entry point."""

import argparse
import sys

import uvicorn

from calcengine.config import get_settings
from calcengine.exceptions import ConfigurationError
from calcengine.logger import Logger, session_logger

logger: Logger = session_logger


def main() -> None:
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error("FATAL: Invalid configuration", error=e.message, **e.details)
        sys.exit(1)

    parser = argparse.ArgumentParser(description="calcengine Web Server - REST expression evaluation")
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host address to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.web_port,
        help=f"Port number to listen on (default: {settings.web_port}, or CALCENGINE_WEB_PORT env var)",
    )
    args = parser.parse_args()

    from calcengine.web_server import CalcWebServer

    server = CalcWebServer(host=args.host, port=args.port)

    try:
        logger.info("=" * 70)
        logger.info("STARTING CALCENGINE WEB SERVER")
        logger.info("=" * 70)
        logger.info("Configuration", host=args.host, port=args.port)
        logger.info(f"Evaluate: POST http://{args.host}:{args.port}/evaluate")
        logger.info(f"Health check: http://{args.host}:{args.port}/health")
        logger.info("=" * 70)
        uvicorn.run(server.app, host=args.host, port=args.port, log_level="info")
        logger.info("Web server shutdown complete")
    except KeyboardInterrupt:
        logger.info("Web server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error("Failed to start web server", error=str(e), error_type=type(e).__name__)
        sys.exit(1)


if __name__ == "__main__":
    main()
