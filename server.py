import os
import signal
import sys

from dotenv import load_dotenv

load_dotenv()  # Loads FREISPACE_API_KEY / STAGE from .env before settings resolve

from core.config import get_config, resolve_settings  # noqa: E402
from core.logging_config import setup_logging  # noqa: E402
from core.registry import load_tool_specs, register_tools  # noqa: E402
from mcp.server.fastmcp import FastMCP  # noqa: E402
from utils.http_client import FreispaceClient  # noqa: E402

SERVER_NAME = "freispace"
VERSION = "1.0.0"

# Set up logging using core.logging_config
logger = setup_logging()


def create_server() -> FastMCP:
    """Resolve settings, build the HTTP client and register every analytics tool."""
    settings = resolve_settings()
    logger.info(
        "Using stage %s (%s), API key %s",
        settings.stage,
        settings.base_url,
        "configured" if settings.api_key else "missing",
    )
    client = FreispaceClient(settings)

    instructions = (get_config() or {}).get("instructions")
    mcp = FastMCP(SERVER_NAME, instructions=instructions)
    logger.info("MCP server instance created with instructions: %s", bool(instructions))

    logger.info("Loading MCP tools...")
    register_tools(mcp, load_tool_specs(), client)
    return mcp


def _handle_signal(signum, frame):
    logger.info(f"Received {signal.Signals(signum).name} (PID: {os.getpid()})")
    raise KeyboardInterrupt


def main() -> None:
    logger.info(f"Starting server v{VERSION} (PID: {os.getpid()})")
    try:
        mcp = create_server()
    except Exception:
        logger.exception(f"Fatal error starting server (PID: {os.getpid()})")
        sys.exit(1)

    signal.signal(signal.SIGTERM, _handle_signal)
    try:
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception(f"Fatal error running server (PID: {os.getpid()})")
        sys.exit(1)
    logger.info(f"Server closed (PID: {os.getpid()})")
    sys.exit(0)


if __name__ == "__main__":
    main()
