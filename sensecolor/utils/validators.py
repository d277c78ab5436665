"""YAML schema validation and config loading.

Provides pydantic models for the two file formats the package reads:
    - Sensor schema (sensors.v1.yaml): per-sensor metadata and category
    - Samples schema (samples.v1.yaml): recorded raw samples to replay

SensorProfile is also the in-process input to readings.assemble_reading, so
callers that never touch YAML still construct one directly:

    profile = SensorProfile(category="color", max_range=65535.0)

Units:
    - max_range: sensor-native counts (color) or lux (light)
    - timestamp: nanoseconds, as delivered by the sensor service

Usage:
    from sensecolor.utils import validators

    sensors = validators.load_sensor_profiles("configs/sensors_v1.yaml")
    samples = validators.load_samples_file("configs/samples_example.yaml")
"""

import math
from enum import Enum
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SensorCategory(str, Enum):
    """Kind of sensor a sample came from. Declaration order is display order."""

    COLOR = "color"
    LIGHT = "light"
    UNKNOWN = "unknown"


# ============================================================================
# SENSOR SCHEMA V1
# ============================================================================

class SensorProfile(BaseModel):
    """Static metadata needed to convert one sensor's samples."""

    model_config = ConfigDict(frozen=True)

    category: SensorCategory = Field(..., description="color, light or unknown")
    max_range: float = Field(..., description="Max reportable value; <= 0 disables normalization")
    name: str = Field("sensor", description="Display name, unique within a sensors file")
    vendor: str = Field("", description="Manufacturer string")
    version: int = Field(0, description="Driver/hardware version")
    string_type: str = Field("unknown", description="Platform sensor type string")
    resolution: float = Field(0.0, ge=0.0, description="Smallest reportable step")
    power: float = Field(0.0, ge=0.0, description="Power draw (mA)")

    @field_validator('category', mode='before')
    @classmethod
    def normalize_category(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('max_range')
    @classmethod
    def validate_max_range(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"max_range must be finite, got {v}")
        return v

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Sensor name must be non-empty")
        return v


class SensorsFileV1(BaseModel):
    """Container for sensor profiles (YAML file format)."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("sensors.v1", alias="schema", description="Schema version")
    sensors: List[SensorProfile] = Field(..., description="List of sensors")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "sensors.v1":
            raise ValueError(f"Expected schema 'sensors.v1', got '{v}'")
        return v

    @model_validator(mode='after')
    def validate_unique_names(self) -> 'SensorsFileV1':
        seen = set()
        for sensor in self.sensors:
            if sensor.name in seen:
                raise ValueError(f"Duplicate sensor name: '{sensor.name}'")
            seen.add(sensor.name)
        return self

    def get(self, name: str) -> SensorProfile:
        """Look up a profile by name.

        Raises
        ------
        KeyError
            If no sensor has that name (message lists the known names)
        """
        for sensor in self.sensors:
            if sensor.name == name:
                return sensor
        known = ", ".join(s.name for s in self.sensors) or "<none>"
        raise KeyError(f"Unknown sensor '{name}'. Known sensors: {known}")


# ============================================================================
# SAMPLES SCHEMA V1
# ============================================================================

class SampleV1(BaseModel):
    """One recorded raw sample."""

    sensor: str = Field(..., description="Name of a sensor in the sensors file")
    timestamp: int = Field(0, ge=0, description="Event time (ns)")
    accuracy: int = Field(0, description="Sensor-reported accuracy status")
    values: List[float] = Field(default_factory=list, description="Raw channel values")


class SamplesFileV1(BaseModel):
    """Container for recorded samples (YAML file format)."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("samples.v1", alias="schema", description="Schema version")
    samples: List[SampleV1] = Field(..., description="Samples in replay order")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "samples.v1":
            raise ValueError(f"Expected schema 'samples.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_sensor_profiles(path: Union[str, Path]) -> SensorsFileV1:
    """Load and validate sensor profiles from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to a sensors.v1 YAML file

    Returns
    -------
    SensorsFileV1
        Validated sensor profiles

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (message names the file and offending field)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Sensor profiles not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Sensor profiles validation failed at {path}: expected a mapping")
    try:
        return SensorsFileV1(**data)
    except Exception as e:
        raise ValueError(f"Sensor profiles validation failed at {path}: {e}") from e


def load_samples_file(path: Union[str, Path]) -> SamplesFileV1:
    """Load and validate recorded samples from YAML.

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Samples file not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Samples file validation failed at {path}: expected a mapping")
    try:
        return SamplesFileV1(**data)
    except Exception as e:
        raise ValueError(f"Samples file validation failed at {path}: {e}") from e
