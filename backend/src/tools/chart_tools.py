"""
MCP chart tools.
Exposes generate_chart and download_chart to MCP clients through FastMCP.
"""
from typing import Any, Dict, List, Optional
import logging

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from src.models.chart_models import DatasetInput, LabelValue
from src.models.errors import ChartError
from src.services.chart_tool_service import get_chart_tool_service

logger = logging.getLogger(__name__)

mcp = FastMCP("quickchart-server")


def _to_tool_error(error: ChartError) -> ToolError:
    prefix = "Invalid parameters" if error.invalid_params else "Internal error"
    return ToolError(f"{prefix}: {error.message}")


async def generate_chart(
    type: str,
    datasets: List[DatasetInput],
    labels: Optional[List[LabelValue]] = None,
    title: Optional[str] = None,
    options: Optional[Dict[str, Any]] = None,
) -> str:
    """Generate a chart using QuickChart and return the image URL.

    Supported types: bar, line, pie, doughnut, radar, polarArea, scatter,
    bubble, radialGauge, speedometer. Scatter and bubble datasets take
    [x, y] / [x, y, r] points; gauges take a single value.
    """
    arguments = {
        "type": type,
        "labels": labels,
        "datasets": [
            dataset.model_dump(exclude_none=True) if isinstance(dataset, DatasetInput) else dataset
            for dataset in datasets
        ],
        "title": title,
        "options": options,
    }
    try:
        return await get_chart_tool_service().generate_chart(arguments)
    except ChartError as e:
        logger.error(f"generate_chart failed: {e.kind}: {e.message}")
        raise _to_tool_error(e) from e


async def download_chart(config: Dict[str, Any], outputPath: Optional[str] = None) -> str:
    """Download a chart image to a local file.

    The config may be flat (type, labels, datasets at the top level) or a full
    chart object with labels and datasets inside data. Without outputPath the
    image is saved to the Desktop, or the home directory when the Desktop is
    not writable.
    """
    try:
        return await get_chart_tool_service().download_chart(config, outputPath)
    except ChartError as e:
        logger.error(f"download_chart failed: {e.kind}: {e.message}")
        raise _to_tool_error(e) from e


mcp.tool(name="generate_chart")(generate_chart)
mcp.tool(name="download_chart")(download_chart)
