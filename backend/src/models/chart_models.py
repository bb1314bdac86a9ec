from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from typing import List, Optional, Dict, Any, Union
from datetime import datetime
import copy

from .chart_enums import ChartType


ColorValue = Union[str, List[str]]
LabelValue = Union[str, int, float]


class DatasetInput(BaseModel):
    """A single dataset as supplied by the caller"""
    model_config = ConfigDict(extra="allow")

    label: Optional[str] = None
    data: Optional[Any] = Field(default=None, description="Numbers, or [x, y] / [x, y, r] points for scatter/bubble")
    backgroundColor: Optional[ColorValue] = None
    borderColor: Optional[ColorValue] = None
    additionalConfig: Optional[Dict[str, Any]] = None


class GenerateChartRequest(BaseModel):
    """Flat chart description accepted by generate_chart.

    Fields are optional here so that the normalizer, not request parsing,
    reports which gate a malformed description failed.
    """
    model_config = ConfigDict(extra="allow")

    type: Optional[str] = Field(default=None, description="Chart type (bar, line, pie, doughnut, radar, polarArea, scatter, bubble, radialGauge, speedometer)")
    labels: Optional[List[LabelValue]] = Field(default=None, description="Labels for data points")
    datasets: Optional[Any] = None
    title: Optional[str] = None
    options: Optional[Dict[str, Any]] = None


class DownloadChartRequest(BaseModel):
    """Request model for download_chart"""
    config: Optional[Any] = Field(default=None, description="Chart configuration object, flat or nested under data")
    outputPath: Optional[str] = Field(
        default=None,
        description="Path where the chart image should be saved. Defaults to Desktop or home directory.",
    )


class CanonicalChartConfig(BaseModel):
    """Validated, renderer-ready chart configuration.

    ``data`` and ``options`` are deep-copied on construction and every read
    returns a fresh copy, so the configuration cannot change after
    normalization.
    """
    model_config = ConfigDict(frozen=True)

    type: ChartType
    _data: Dict[str, Any] = PrivateAttr(default_factory=dict)
    _options: Dict[str, Any] = PrivateAttr(default_factory=dict)

    def __init__(self, type: ChartType, data: Dict[str, Any], options: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(type=type, **kwargs)
        self._data = copy.deepcopy(dict(data))
        self._options = copy.deepcopy(dict(options or {}))

    @property
    def data(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    @property
    def options(self) -> Dict[str, Any]:
        return copy.deepcopy(self._options)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "data": self.data,
            "options": self.options,
        }


class ChartUrlResponse(BaseModel):
    success: bool
    url: str
    message: Optional[str] = None
    timestamp: datetime


class ChartDownloadResponse(BaseModel):
    success: bool
    path: str
    message: Optional[str] = None
    timestamp: datetime


class ChartTypeInfo(BaseModel):
    """Catalogue entry for a supported chart type"""
    type: str
    description: str
    data_format: str
    example: Dict[str, Any]
