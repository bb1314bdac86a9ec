from enum import Enum
from typing import List


class ChartType(str, Enum):

    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    DOUGHNUT = "doughnut"
    RADAR = "radar"
    POLAR_AREA = "polarArea"
    SCATTER = "scatter"
    BUBBLE = "bubble"
    RADIAL_GAUGE = "radialGauge"
    SPEEDOMETER = "speedometer"


GAUGE_CHART_TYPES = (ChartType.RADIAL_GAUGE, ChartType.SPEEDOMETER)
POINT_CHART_TYPES = (ChartType.SCATTER, ChartType.BUBBLE)


def valid_chart_types() -> List[str]:
    """Chart type names in declaration order"""
    return [t.value for t in ChartType]


def is_valid_chart_type(value) -> bool:
    try:
        ChartType(value)
        return True
    except ValueError:
        return False


def get_point_format(chart_type: ChartType) -> str:
    """Describe the point tuple a scatter/bubble dataset expects"""
    if chart_type == ChartType.BUBBLE:
        return "[x, y, r]"
    return "[x, y]"
