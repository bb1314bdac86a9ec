from typing import Any, Dict, List, Mapping, Optional

from src.models.chart_enums import ChartType, GAUGE_CHART_TYPES, POINT_CHART_TYPES, get_point_format


def ordered_merge(*mappings: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Shallow-merge mappings left to right; later keys override earlier ones.

    ``None`` entries are skipped so optional layers can be passed directly.
    """
    merged: Dict[str, Any] = {}
    for mapping in mappings:
        if mapping:
            merged.update(mapping)
    return merged


CHART_DESCRIPTIONS: Dict[ChartType, str] = {
    ChartType.BAR: "Bar chart for comparing categorical data",
    ChartType.LINE: "Line chart for time series or trends",
    ChartType.PIE: "Pie chart for showing proportions",
    ChartType.DOUGHNUT: "Doughnut chart, a pie with a hollow center",
    ChartType.RADAR: "Radar chart for comparing several variables",
    ChartType.POLAR_AREA: "Polar area chart, equal-angle segments scaled by value",
    ChartType.SCATTER: "Scatter plot of [x, y] points",
    ChartType.BUBBLE: "Bubble chart of [x, y, r] points",
    ChartType.RADIAL_GAUGE: "Radial gauge showing a single value",
    ChartType.SPEEDOMETER: "Speedometer gauge showing a single value",
}


def get_chart_template(chart_type: ChartType) -> Dict[str, Any]:
    """Return an example flat chart description for the given type."""
    if chart_type in GAUGE_CHART_TYPES:
        return {
            "type": chart_type.value,
            "datasets": [{"label": "Score", "data": [72]}],
            "title": "Chart title",
        }
    if chart_type == ChartType.SCATTER:
        return {
            "type": chart_type.value,
            "datasets": [{"label": "Series 1", "data": [[1, 2], [2, 4], [3, 5]]}],
            "title": "Chart title",
        }
    if chart_type == ChartType.BUBBLE:
        return {
            "type": chart_type.value,
            "datasets": [{"label": "Series 1", "data": [[1, 2, 5], [2, 4, 10]]}],
            "title": "Chart title",
        }
    return {
        "type": chart_type.value,
        "labels": ["Category 1", "Category 2"],
        "datasets": [
            {"label": "Metric 1", "data": [100, 150], "backgroundColor": "#8884d8"},
        ],
        "title": "Chart title",
    }


def get_supported_charts() -> List[Dict[str, Any]]:
    """Return supported chart types with their expected data format and an example."""
    charts = []
    for chart_type in ChartType:
        if chart_type in POINT_CHART_TYPES:
            data_format = f"list of {get_point_format(chart_type)} points"
        elif chart_type in GAUGE_CHART_TYPES:
            data_format = "single non-zero numeric value in the first dataset"
        else:
            data_format = "list of numbers aligned with labels"
        charts.append({
            "type": chart_type.value,
            "description": CHART_DESCRIPTIONS[chart_type],
            "data_format": data_format,
            "example": get_chart_template(chart_type),
        })
    return charts


def get_tool_definitions() -> List[Dict[str, Any]]:
    """Tool names, descriptions and JSON input schemas for both chart operations."""
    color_schema = {
        "oneOf": [
            {"type": "string"},
            {"type": "array", "items": {"type": "string"}},
        ]
    }
    dataset_schema = {
        "type": "object",
        "properties": {
            "label": {"type": "string"},
            "data": {"type": "array"},
            "backgroundColor": color_schema,
            "borderColor": color_schema,
            "additionalConfig": {"type": "object"},
        },
        "required": ["data"],
    }
    return [
        {
            "name": "generate_chart",
            "description": "Generate a chart using QuickChart",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "type": {
                        "type": "string",
                        "enum": [t.value for t in ChartType],
                        "description": "Chart type",
                    },
                    "labels": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Labels for data points",
                    },
                    "datasets": {"type": "array", "items": dataset_schema},
                    "title": {"type": "string"},
                    "options": {"type": "object"},
                },
                "required": ["type", "datasets"],
            },
        },
        {
            "name": "download_chart",
            "description": "Download a chart image to a local file",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "config": {
                        "type": "object",
                        "description": "Chart configuration object",
                    },
                    "outputPath": {
                        "type": "string",
                        "description": (
                            "Path where the chart image should be saved. If not provided, "
                            "the chart will be saved to Desktop or home directory."
                        ),
                    },
                },
                "required": ["config"],
            },
        },
    ]


__all__ = [
    "ordered_merge",
    "CHART_DESCRIPTIONS",
    "get_chart_template",
    "get_supported_charts",
    "get_tool_definitions",
]
