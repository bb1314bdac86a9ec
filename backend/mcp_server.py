#!/usr/bin/env python3
"""
MCP stdio entry point for the QuickChart server
"""
import logging
import sys

from src.models.config import settings
from src.tools.chart_tools import mcp


def setup_logging():
    # stdout carries the MCP protocol, so logs go to stderr only
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    logger = logging.getLogger(__name__)
    logger.info("Logging configuration complete")
    return logger


def main():
    logger = setup_logging()
    logger.info("QuickChart MCP server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
