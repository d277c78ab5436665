"""Sample → display-row conversion (depends only on sensecolor.utils).

Convenience imports:
    from sensecolor.readings import assemble_reading, build_reading
"""

from .conversions import (
    assemble_reading,
    build_color_conversions,
    build_light_conversions,
    build_reading,
    group_readings,
)
from .models import (
    ConversionResult,
    ConversionType,
    ConvertedValue,
    GroupedReadings,
    SensorReading,
)

__all__ = [
    'assemble_reading',
    'build_color_conversions',
    'build_light_conversions',
    'build_reading',
    'group_readings',
    'ConversionResult',
    'ConversionType',
    'ConvertedValue',
    'GroupedReadings',
    'SensorReading',
]
