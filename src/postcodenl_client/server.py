from __future__ import annotations

import logging

from fastmcp import FastMCP

from postcodenl_client.app.container import build_container
from postcodenl_client.app.logger import configure_logging
from postcodenl_client.tools.address_tools import register_address_tools

configure_logging()
log = logging.getLogger(__name__)

mcp = FastMCP("postcodenl-client")

try:
    _container = build_container()
    register_address_tools(mcp, _container)
    log.info("Address tools registered successfully")
except Exception as e:
    log.error("Failed to register address tools: %s", e, exc_info=True)
    raise


if __name__ == "__main__":
    # default: STDIO
    mcp.run()
