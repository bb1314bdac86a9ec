"""
Protocol-neutral handlers for the generate_chart and download_chart operations.

Both the HTTP router and the MCP server call into this service so that
validation, error wrapping and response text stay identical across surfaces.
"""
from typing import Any, Dict, List, Mapping, Optional
import logging

from src.models.chart_models import CanonicalChartConfig
from src.models.errors import ChartError, InternalError
from src.services.chart_normalizer import normalize, normalize_download_config
from src.services.quickchart_service import QuickChartService, get_quickchart_service
from src.utils.chart_utils import get_supported_charts, get_tool_definitions

logger = logging.getLogger(__name__)


class ChartToolService:

    def __init__(self, quickchart_service: QuickChartService):
        self.quickchart_service = quickchart_service

    def list_tools(self) -> List[Dict[str, Any]]:
        return get_tool_definitions()

    def list_chart_types(self) -> List[Dict[str, Any]]:
        return get_supported_charts()

    def build_config(self, arguments: Optional[Mapping[str, Any]]) -> CanonicalChartConfig:
        return normalize(arguments)

    async def generate_chart(self, arguments: Optional[Mapping[str, Any]]) -> str:
        """Normalize a flat chart description and return its QuickChart URL"""
        try:
            config = self.build_config(arguments)
            url = self.quickchart_service.build_url(config)
            logger.info(f"Generated {config.type.value} chart URL ({len(url)} chars)")
            return url
        except ChartError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error generating chart: {str(e)}")
            raise InternalError(f"Failed to generate chart: {str(e) or 'Unknown error'}") from e

    async def save_chart(self, config: Any, output_path: Optional[str] = None) -> str:
        """Normalize a flat or nested config, render it and return the saved path"""
        try:
            chart_config = normalize_download_config(config)
            return await self.quickchart_service.download(chart_config, output_path)
        except ChartError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error downloading chart: {str(e)}")
            raise InternalError(f"Failed to download chart: {str(e) or 'Unknown error'}") from e

    async def download_chart(self, config: Any, output_path: Optional[str] = None) -> str:
        saved_path = await self.save_chart(config, output_path)
        return f"Chart saved to {saved_path}"


_global_chart_tool_service = None


def get_chart_tool_service() -> ChartToolService:
    """Get chart tool service instance for dependency injection"""
    global _global_chart_tool_service

    if _global_chart_tool_service is None:
        _global_chart_tool_service = ChartToolService(get_quickchart_service())

    return _global_chart_tool_service
