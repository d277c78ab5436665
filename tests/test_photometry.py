"""Test illuminance-derived quantities.

Tests for sensecolor.utils.photometry:
    - Foot-candle and luminance scaling
    - Exposure value at ISO 100 (finite and -inf sentinel)
    - Scene thresholds (lower bound inclusive for the next label)

Run:
    pytest tests/test_photometry.py -v
"""

import math

import pytest
import torch

from sensecolor.utils import photometry


def test_foot_candles():
    assert photometry.lux_to_foot_candles(10.764).item() == pytest.approx(1.0, rel=1e-6)


def test_nits():
    assert photometry.lux_to_nits(math.pi * 100.0).item() == pytest.approx(100.0, rel=1e-5)


def test_exposure_value_finite():
    # log2(12.5 * 8) = log2(100)
    ev = photometry.exposure_value_iso100(12.5)
    assert ev.dtype == torch.float32
    assert ev.item() == pytest.approx(math.log2(100.0), abs=1e-4)


@pytest.mark.parametrize("lux", [0.0, -3.0])
def test_exposure_value_non_positive_is_negative_infinity(lux):
    ev = photometry.exposure_value_iso100(lux).item()
    assert ev == -math.inf
    assert not math.isnan(ev)


def test_exposure_value_batched():
    ev = photometry.exposure_value_iso100(torch.tensor([0.0, 0.125, 1.0]))
    assert ev[0].item() == -math.inf
    assert torch.allclose(ev[1:], torch.tensor([0.0, 3.0]))


@pytest.mark.parametrize("lux,scene", [
    (0.0, "Night"),
    (5.0, "Night"),
    (9.99, "Night"),
    (10.0, "Twilight"),
    (49.9, "Twilight"),
    (50.0, "Indoor"),
    (199.0, "Indoor"),
    (200.0, "Office"),
    (500.0, "Cloudy"),
    (1000.0, "Sunny"),
    (15000.0, "Sunny"),
    (24999.0, "Sunny"),
    (25000.0, "Direct Sun"),
    (120000.0, "Direct Sun"),
])
def test_classify_scene(lux, scene):
    assert photometry.classify_scene(lux) == scene
