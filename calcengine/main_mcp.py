import argparse
import asyncio
import sys

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

    parser = argparse.ArgumentParser(
        description="calcengine MCP Server - expression evaluation via Model Context Protocol"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host address to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.mcp_port,
        help=f"Port number to listen on (default: {settings.mcp_port}, or CALCENGINE_MCP_PORT env var)",
    )
    args = parser.parse_args()

    from calcengine.mcp_server.mcp_server import main as serve

    try:
        logger.info("=" * 70)
        logger.info("STARTING CALCENGINE MCP SERVER")
        logger.info("=" * 70)
        logger.info(
            "Configuration",
            host=args.host,
            port=args.port,
            transport="HTTP Streamable",
            default_angle_mode=settings.angle_mode,
        )
        logger.info(f"MCP endpoint: http://{args.host}:{args.port}/mcp")
        logger.info("=" * 70)
        asyncio.run(serve(host=args.host, port=args.port))
        logger.info("MCP server shutdown complete")
    except KeyboardInterrupt:
        logger.info("Shutdown complete")
        sys.exit(0)
    except Exception as e:
        logger.error("Failed to start server", error=str(e), error_type=type(e).__name__)
        sys.exit(1)


if __name__ == "__main__":
    main()
