"""
Tools module for the QuickChart server.
Contains the chart tools exposed to MCP clients.
"""

from .chart_tools import mcp, generate_chart, download_chart

__all__ = [
    'mcp',
    'generate_chart',
    'download_chart'
]
