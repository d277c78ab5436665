"""Test YAML schema validation and config loading.

Tests for sensecolor.utils.validators:
    - Load the example sensors/samples files shipped in configs/
    - Reject invalid files with messages naming the file and field
    - Category normalization and max_range checks
    - Profile lookup and display ordering

Run:
    pytest tests/test_schemas.py -v
"""

import math
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from sensecolor.utils import validators
from sensecolor.utils.validators import SensorCategory, SensorProfile


@pytest.fixture(scope="module")
def project_root():
    return Path(__file__).parent.parent


@pytest.fixture(scope="module")
def sensors(project_root):
    return validators.load_sensor_profiles(project_root / "configs/sensors_v1.yaml")


def _write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


# ============================================================================
# SENSOR PROFILES
# ============================================================================

def test_load_example_sensor_profiles(sensors):
    assert sensors.schema_version == "sensors.v1"
    assert {s.name for s in sensors.sensors} == {
        "tcs3472", "rgb-uncalibrated", "ambient-light", "proximity"
    }
    tcs = sensors.get("tcs3472")
    assert tcs.category is SensorCategory.COLOR
    assert tcs.max_range == 65535.0
    assert tcs.vendor == "ams"


def test_get_unknown_sensor(sensors):
    with pytest.raises(KeyError, match="Unknown sensor 'nope'"):
        sensors.get("nope")


def test_profile_defaults():
    profile = SensorProfile(category="light", max_range=1000.0)
    assert profile.name == "sensor"
    assert profile.string_type == "unknown"
    assert profile.resolution == 0.0


def test_category_case_insensitive():
    assert SensorProfile(category=" COLOR ", max_range=1.0).category is SensorCategory.COLOR


def test_invalid_category():
    with pytest.raises(ValidationError):
        SensorProfile(category="infrared", max_range=1.0)


@pytest.mark.parametrize("max_range", [0.0, -10.0])
def test_non_positive_max_range_allowed(max_range):
    assert SensorProfile(category="color", max_range=max_range).max_range == max_range


@pytest.mark.parametrize("max_range", [math.inf, math.nan])
def test_non_finite_max_range_rejected(max_range):
    with pytest.raises(ValidationError, match="max_range must be finite"):
        SensorProfile(category="color", max_range=max_range)


def test_profile_is_frozen():
    profile = SensorProfile(category="color", max_range=1.0)
    with pytest.raises(ValidationError):
        profile.max_range = 2.0


def test_duplicate_sensor_names(tmp_path):
    path = _write_yaml(tmp_path / "sensors.yaml", {
        "schema": "sensors.v1",
        "sensors": [
            {"name": "a", "category": "color", "max_range": 1.0},
            {"name": "a", "category": "light", "max_range": 1.0},
        ],
    })
    with pytest.raises(ValueError, match="Duplicate sensor name"):
        validators.load_sensor_profiles(path)


def test_wrong_schema_version(tmp_path):
    path = _write_yaml(tmp_path / "sensors.yaml", {"schema": "sensors.v2", "sensors": []})
    with pytest.raises(ValueError, match="sensors.v1"):
        validators.load_sensor_profiles(path)


def test_missing_required_field(tmp_path):
    path = _write_yaml(tmp_path / "sensors.yaml", {
        "schema": "sensors.v1",
        "sensors": [{"name": "a", "category": "color"}],
    })
    with pytest.raises(ValueError, match="validation failed at .*sensors.yaml"):
        validators.load_sensor_profiles(path)


def test_non_mapping_file(tmp_path):
    path = tmp_path / "sensors.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError, match="expected a mapping"):
        validators.load_sensor_profiles(path)


def test_missing_sensor_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        validators.load_sensor_profiles(tmp_path / "missing.yaml")


# ============================================================================
# SAMPLES
# ============================================================================

def test_load_example_samples(project_root, sensors):
    samples = validators.load_samples_file(project_root / "configs/samples_example.yaml")
    assert len(samples.samples) == 5
    assert samples.samples[1].values == [12000.0, 23000.0, 8000.0, 41000.0]
    for sample in samples.samples:
        sensors.get(sample.sensor)


def test_sample_defaults():
    sample = validators.SampleV1(sensor="x")
    assert sample.timestamp == 0
    assert sample.values == []


def test_negative_timestamp_rejected(tmp_path):
    path = _write_yaml(tmp_path / "samples.yaml", {
        "schema": "samples.v1",
        "samples": [{"sensor": "a", "timestamp": -1, "values": [1.0]}],
    })
    with pytest.raises(ValueError, match="Samples file validation failed"):
        validators.load_samples_file(path)


def test_missing_samples_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        validators.load_samples_file(tmp_path / "missing.yaml")
