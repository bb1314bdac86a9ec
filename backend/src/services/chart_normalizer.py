"""
Chart configuration normalizer.

Turns a loosely typed chart description into a CanonicalChartConfig that
QuickChart can render, or raises a ChartError naming the gate that failed.
The download path additionally accepts the nested (canonical) shape and
lifts it to the flat shape before normalizing.
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union
import logging
import math

from src.models.chart_enums import (
    ChartType,
    GAUGE_CHART_TYPES,
    POINT_CHART_TYPES,
    get_point_format,
    is_valid_chart_type,
    valid_chart_types,
)
from src.models.chart_models import CanonicalChartConfig
from src.models.errors import (
    InvalidConfig,
    InvalidEnum,
    InvalidField,
    MissingField,
    MissingInput,
)
from src.utils.chart_utils import ordered_merge

logger = logging.getLogger(__name__)

# Keys that may be found under ``data`` in the nested shape
LIFTABLE_KEYS = ("datasets", "labels", "type")

COLOR_KEYS = ("backgroundColor", "borderColor")


def is_present(value: Any) -> bool:
    """Presence test used by every gate.

    None, False, zero, NaN and the empty string count as absent. Containers
    count as present even when empty, so ``data: []`` reaches the chart-type
    rules instead of failing the dataset gate.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    return True


def _first(sequence: Any) -> Any:
    if isinstance(sequence, (list, tuple)) and sequence:
        return sequence[0]
    return None


def normalize(raw: Optional[Mapping[str, Any]]) -> CanonicalChartConfig:
    """Validate a flat chart description and build the canonical config.

    Raises:
        MissingInput: no description was supplied
        MissingField: ``type`` is absent
        InvalidField: ``datasets`` is not a list, or a dataset has no data
        InvalidEnum: ``type`` is not a supported chart type
    """
    if raw is None or not isinstance(raw, Mapping):
        raise MissingInput()

    if not is_present(raw.get("type")):
        raise MissingField("type", "Chart type is required")

    datasets = raw.get("datasets")
    if not isinstance(datasets, (list, tuple)):
        raise InvalidField("datasets", "Datasets must be a non-empty array")

    if not is_valid_chart_type(raw["type"]):
        raise InvalidEnum("type", valid_chart_types())
    chart_type = ChartType(raw["type"])

    canonical_datasets = [_build_dataset(dataset) for dataset in datasets]

    caller_options = raw.get("options")
    if caller_options is not None and not isinstance(caller_options, Mapping):
        raise InvalidField("options", "Options must be an object")

    title = raw.get("title")
    options = ordered_merge(
        caller_options,
        {"title": {"display": True, "text": title}} if title else None,
    )

    if chart_type in GAUGE_CHART_TYPES:
        options = _apply_gauge_rules(chart_type, datasets, options)
    elif chart_type in POINT_CHART_TYPES:
        _check_point_data(chart_type, datasets)

    config = CanonicalChartConfig(
        type=chart_type,
        data={
            "labels": _copy_labels(raw.get("labels")),
            "datasets": canonical_datasets,
        },
        options=options,
    )
    logger.debug(f"Normalized {chart_type.value} chart with {len(canonical_datasets)} dataset(s)")
    return config


def _copy_labels(labels: Any) -> Any:
    if not labels:
        return []
    return list(labels) if isinstance(labels, (list, tuple)) else labels


def _build_dataset(dataset: Any) -> Dict[str, Any]:
    if not isinstance(dataset, Mapping) or not is_present(dataset.get("data")):
        raise InvalidField("dataset.data", "Each dataset must have a data property")

    base = {"label": dataset.get("label") or "", "data": dataset["data"]}
    # unset colours are left out so QuickChart applies its default palette
    for key in COLOR_KEYS:
        if dataset.get(key) is not None:
            base[key] = dataset[key]

    additional = dataset.get("additionalConfig")
    return ordered_merge(
        base,
        additional if isinstance(additional, Mapping) else None,
    )


def _apply_gauge_rules(chart_type: ChartType, datasets, options: Dict[str, Any]) -> Dict[str, Any]:
    first_dataset = _first(datasets)
    first_value = _first(first_dataset.get("data")) if isinstance(first_dataset, Mapping) else None
    if not is_present(first_value):
        raise InvalidField("dataset.data", f"{chart_type.value} requires a single numeric value")

    # datalabels prints the raw value by default; a JSON body cannot carry a formatter function
    plugins = options.get("plugins") if isinstance(options.get("plugins"), Mapping) else None
    return ordered_merge(
        options,
        {"plugins": ordered_merge(plugins, {"datalabels": {"display": True}})},
    )


def _check_point_data(chart_type: ChartType, datasets) -> None:
    # Only the first point of each series is checked
    for dataset in datasets:
        if not isinstance(_first(dataset["data"]), (list, tuple)):
            raise InvalidField(
                "dataset.data",
                f"{chart_type.value} requires data points in {get_point_format(chart_type)} format",
            )


@dataclass(frozen=True)
class FlatDescription:
    """Description with type/datasets/labels at the top level"""
    fields: Dict[str, Any]


@dataclass(frozen=True)
class NestedDescription:
    """Description in the canonical shape, with datasets/labels under ``data``"""
    fields: Dict[str, Any]
    nested: Dict[str, Any]


ChartDescription = Union[FlatDescription, NestedDescription]


def classify_description(raw: Any) -> ChartDescription:
    """Tag a download config as flat or nested.

    Raises:
        InvalidConfig: the config is not an object
    """
    if raw is None or not isinstance(raw, Mapping):
        raise InvalidConfig("Config must be a valid chart configuration object")

    fields = dict(raw)
    nested = fields.get("data")
    if isinstance(nested, Mapping) and any(key not in fields or fields[key] is None for key in LIFTABLE_KEYS):
        return NestedDescription(fields=fields, nested=dict(nested))
    return FlatDescription(fields=fields)


def lift_description(description: ChartDescription) -> Dict[str, Any]:
    """Lift nested fields to the top level without overriding top-level values.

    Raises:
        InvalidConfig: ``type`` or ``datasets`` is still missing afterwards
    """
    fields = dict(description.fields)
    if isinstance(description, NestedDescription):
        for key in LIFTABLE_KEYS:
            if not is_present(fields.get(key)) and is_present(description.nested.get(key)):
                fields[key] = description.nested[key]

    if not is_present(fields.get("type")) or not is_present(fields.get("datasets")):
        raise InvalidConfig(
            "Config must include type and datasets properties (either at root level or inside data object)"
        )
    return fields


def normalize_download_config(raw: Any) -> CanonicalChartConfig:
    """Adapt a flat or nested download config and normalize it"""
    description = classify_description(raw)
    if isinstance(description, NestedDescription):
        logger.debug("Lifting nested chart fields from data object")
    return normalize(lift_description(description))
