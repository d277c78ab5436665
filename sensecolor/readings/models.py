"""Reading records -- what the formatter hands to a display.

Every type here is an immutable, slotted dataclass. A ``SensorReading`` is
built fresh per incoming sample; nothing carries over between samples.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sensecolor.utils.validators import SensorCategory, SensorProfile


class ConversionType(str, Enum):
    """Presentation tag for a converted value; not derived from the value."""

    RAW = "raw"
    LINEAR = "linear"
    NON_LINEAR = "non_linear"
    COLOR_SPACE = "color_space"


@dataclass(frozen=True, slots=True)
class ConvertedValue:
    """One display row.

    Parameters
    ----------
    name : str
        Row label, e.g. ``"HSV"`` or ``"Exposure Value"``.
    text : str
        Fixed-width text; multi-line values are joined with ``\\n``.
    category : ConversionType
        Presentation tag.
    """

    name: str
    text: str
    category: ConversionType


ConversionResult = tuple[ConvertedValue, ...]
"""Ordered rows for one sample; always starts with the ``Raw`` row."""


@dataclass(frozen=True, slots=True)
class SensorReading:
    """A converted sample together with the metadata it arrived with.

    Parameters
    ----------
    profile : SensorProfile
        Sensor the sample came from.
    timestamp : int
        Event time in nanoseconds.
    accuracy : int
        Sensor-reported accuracy status.
    raw_values : tuple[float, ...]
        Copy of the raw channel values.
    converted_values : ConversionResult
        Output of ``assemble_reading``.
    """

    profile: SensorProfile
    timestamp: int
    accuracy: int
    raw_values: tuple[float, ...]
    converted_values: ConversionResult = ()

    def as_dict(self) -> dict:
        """JSON-ready view (used by the CLI's json output)."""
        return {
            "sensor": self.profile.name,
            "category": self.profile.category.value,
            "timestamp": self.timestamp,
            "accuracy": self.accuracy,
            "raw_values": list(self.raw_values),
            "converted_values": [
                {"name": v.name, "text": v.text, "category": v.category.value}
                for v in self.converted_values
            ],
        }


@dataclass(frozen=True, slots=True)
class GroupedReadings:
    """Readings of one sensor category, in display order."""

    category: SensorCategory
    readings: tuple[SensorReading, ...]
