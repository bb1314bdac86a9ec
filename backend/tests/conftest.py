"""
Test configuration and fixtures for chart normalization and download tests
"""
import pytest
from unittest.mock import AsyncMock

from src.services.chart_normalizer import normalize
from src.services.chart_tool_service import ChartToolService
from src.services.quickchart_service import QuickChartService


PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-chart"


@pytest.fixture
def png_bytes():
    """Bytes returned by the mocked chart fetch"""
    return PNG_BYTES


@pytest.fixture
def bar_description():
    """Sample flat bar chart description"""
    return {
        "type": "bar",
        "labels": ["Q1", "Q2", "Q3"],
        "datasets": [
            {"label": "Revenue", "data": [120, 150, 180], "backgroundColor": "#4e79a7"}
        ],
        "title": "Quarterly Revenue",
    }


@pytest.fixture
def bar_config(bar_description):
    """Canonical config for the sample bar chart"""
    return normalize(bar_description)


@pytest.fixture
def quickchart_service():
    """QuickChartService with the network fetch mocked out"""
    service = QuickChartService(timeout=5)
    service.fetch_chart_image = AsyncMock(return_value=PNG_BYTES)
    return service


@pytest.fixture
def chart_tool_service(quickchart_service):
    """ChartToolService wired to the mocked QuickChartService"""
    return ChartToolService(quickchart_service)
