"""Per-sample conversion pipeline: raw sample + profile → display rows.

``assemble_reading`` is the single entry point a sensor-event callback
calls once per sample. It always emits the ``Raw`` row first and then the
rows for the sensor's category:

    color:  Normalized RGB, HSV, XYZ, LAB, [Clear Channel]
    light:  Illuminance, Foot-candle, Luminance, Exposure Value, Scene

Short samples degrade to fewer rows rather than raising, and an
uncalibrated sensor (``max_range <= 0``) skips normalization. Nothing is
cached; identical inputs give identical output.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Sequence

import torch

from sensecolor.readings.formatting import (
    HSV_FIELDS,
    LAB_FIELDS,
    NORMALIZED_RGB_FIELDS,
    XYZ_FIELDS,
    format_fields,
    format_raw,
    format_value,
    format_value_with_unit,
)
from sensecolor.readings.models import (
    ConversionResult,
    ConversionType,
    ConvertedValue,
    GroupedReadings,
    SensorReading,
)
from sensecolor.utils import color, photometry
from sensecolor.utils.validators import SensorCategory, SensorProfile

logger = logging.getLogger(__name__)

COLOR_MIN_CHANNELS = 3
CLEAR_CHANNEL_INDEX = 3

LIGHT_UNIT_WIDTH = 6
EV_UNIT = "EV@ISO100"


def build_color_conversions(
    profile: SensorProfile,
    raw_values: Sequence[float],
) -> ConversionResult:
    """Rows for a tristimulus sample (R, G, B, [Clear]).

    Parameters
    ----------
    profile : SensorProfile
        Supplies ``max_range`` for normalization.
    raw_values : sequence of float
        At least three channels; fewer yields no rows.

    Returns
    -------
    ConversionResult
        Normalized RGB, HSV, XYZ, LAB, plus Clear Channel when a fourth
        channel is present.
    """
    raw_values = color.as_float32_values(raw_values)
    if len(raw_values) < COLOR_MIN_CHANNELS:
        logger.debug(
            "Color sample has %d channel(s), need %d; skipping color conversions",
            len(raw_values), COLOR_MIN_CHANNELS
        )
        return ()

    if profile.max_range <= 0:
        logger.debug("Sensor '%s' has max_range %s; using raw magnitudes",
                     profile.name, profile.max_range)

    rgb = color.normalize_rgb(raw_values, profile.max_range)
    hsv = color.rgb_to_hsv(rgb)
    xyz = color.rgb_to_xyz(rgb)
    lab = color.xyz_to_lab(xyz)

    conversions = [
        ConvertedValue(
            name="Normalized RGB",
            text=format_fields(rgb.tolist(), NORMALIZED_RGB_FIELDS),
            category=ConversionType.LINEAR,
        ),
        ConvertedValue(
            name="HSV",
            text=format_fields(hsv.tolist(), HSV_FIELDS),
            category=ConversionType.COLOR_SPACE,
        ),
        ConvertedValue(
            name="XYZ",
            text=format_fields(xyz.tolist(), XYZ_FIELDS),
            category=ConversionType.COLOR_SPACE,
        ),
        ConvertedValue(
            name="LAB",
            text=format_fields(lab.tolist(), LAB_FIELDS),
            category=ConversionType.COLOR_SPACE,
        ),
    ]

    if len(raw_values) > CLEAR_CHANNEL_INDEX:
        conversions.append(ConvertedValue(
            name="Clear Channel",
            text=format_value(raw_values[CLEAR_CHANNEL_INDEX], width=10, decimals=4),
            category=ConversionType.LINEAR,
        ))

    return tuple(conversions)


def build_light_conversions(raw_values: Sequence[float]) -> ConversionResult:
    """Rows for an illuminance sample; the first value is lux.

    Returns
    -------
    ConversionResult
        Illuminance, Foot-candle, Luminance (linear) and Exposure Value,
        Scene (non-linear). Empty for an empty sample.
    """
    raw_values = color.as_float32_values(raw_values)
    if len(raw_values) == 0:
        logger.debug("Light sample is empty; skipping light conversions")
        return ()

    lux = torch.tensor(raw_values[0], dtype=torch.float32)
    lux_value = lux.item()

    def linear_row(name: str, value: float, unit: str) -> ConvertedValue:
        return ConvertedValue(
            name=name,
            text=format_value_with_unit(
                value, unit, unit_width=LIGHT_UNIT_WIDTH, value_width=10, decimals=2
            ),
            category=ConversionType.LINEAR,
        )

    ev = photometry.exposure_value_iso100(lux).item()

    return (
        linear_row("Illuminance", lux_value, "lux"),
        linear_row("Foot-candle", photometry.lux_to_foot_candles(lux).item(), "fc"),
        linear_row("Luminance", photometry.lux_to_nits(lux).item(), "nits"),
        ConvertedValue(
            name="Exposure Value",
            text=format_value_with_unit(ev, EV_UNIT, unit_width=10, value_width=8, decimals=2),
            category=ConversionType.NON_LINEAR,
        ),
        ConvertedValue(
            name="Scene",
            text=photometry.classify_scene(lux_value),
            category=ConversionType.NON_LINEAR,
        ),
    )


def assemble_reading(
    profile: SensorProfile,
    raw_values: Sequence[float],
) -> ConversionResult:
    """All display rows for one sample: ``Raw`` first, then by category.

    Parameters
    ----------
    profile : SensorProfile
        Sensor category and max range.
    raw_values : sequence of float
        Raw channel values as delivered by the sensor.

    Returns
    -------
    ConversionResult
        Never empty. ``unknown`` sensors get only the ``Raw`` row. Every row,
        ``Raw`` included, shows the values rounded to float32.
    """
    raw_values = color.as_float32_values(raw_values)
    raw_row = ConvertedValue(
        name="Raw",
        text=format_raw(raw_values),
        category=ConversionType.RAW,
    )

    if profile.category is SensorCategory.COLOR:
        extra = build_color_conversions(profile, raw_values)
    elif profile.category is SensorCategory.LIGHT:
        extra = build_light_conversions(raw_values)
    else:
        extra = ()

    return (raw_row,) + extra


def build_reading(
    profile: SensorProfile,
    raw_values: Sequence[float],
    timestamp: int = 0,
    accuracy: int = 0,
) -> SensorReading:
    """Wrap ``assemble_reading`` output with the sample's metadata."""
    raw = tuple(color.as_float32_values(raw_values))
    return SensorReading(
        profile=profile,
        timestamp=timestamp,
        accuracy=accuracy,
        raw_values=raw,
        converted_values=assemble_reading(profile, raw),
    )


def group_readings(readings: Iterable[SensorReading]) -> tuple[GroupedReadings, ...]:
    """Group readings by sensor category for display.

    Groups follow category order (color, light, unknown); empty categories
    are omitted. Within a group readings are ordered by sensor name, then
    vendor (case-insensitive); readings of the same sensor keep arrival order.
    """
    by_category: dict[SensorCategory, list[SensorReading]] = defaultdict(list)
    for reading in readings:
        by_category[reading.profile.category].append(reading)

    groups = []
    for category in SensorCategory:
        members = by_category.get(category)
        if not members:
            continue
        members.sort(key=lambda r: (r.profile.name.lower(), r.profile.vendor.lower()))
        groups.append(GroupedReadings(category=category, readings=tuple(members)))
    return tuple(groups)
