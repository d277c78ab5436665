"""Photometric quantities derived from an illuminance reading.

Provides:
    - lux → foot-candles
    - lux → luminance in nits (Lambertian approximation, lux / π)
    - lux → exposure value at ISO 100
    - lux → qualitative scene label

Inputs are float or float32 tensors of lux; tensor inputs keep their shape.
Zero or negative lux has no finite exposure value; it maps to -inf.
"""

import math
from typing import Union

import torch


LUX_PER_FOOT_CANDLE = 10.764

# Incident-light calibration constant for EV at ISO 100: EV = log2(lux * 8)
EV_CALIBRATION = 8.0

# Upper bounds (exclusive) in lux, checked in order
SCENE_THRESHOLDS = (
    (10.0, "Night"),
    (50.0, "Twilight"),
    (200.0, "Indoor"),
    (500.0, "Office"),
    (1000.0, "Cloudy"),
    (25000.0, "Sunny"),
)
BRIGHTEST_SCENE = "Direct Sun"

LuxLike = Union[torch.Tensor, float]


def _as_lux(lux: LuxLike) -> torch.Tensor:
    return torch.as_tensor(lux, dtype=torch.float32)


def lux_to_foot_candles(lux: LuxLike) -> torch.Tensor:
    return _as_lux(lux) / LUX_PER_FOOT_CANDLE


def lux_to_nits(lux: LuxLike) -> torch.Tensor:
    return _as_lux(lux) / math.pi


def exposure_value_iso100(lux: LuxLike) -> torch.Tensor:
    """Exposure value at ISO 100 for the given illuminance.

    Parameters
    ----------
    lux : float or torch.Tensor
        Illuminance in lux

    Returns
    -------
    torch.Tensor
        log2(lux * 8) where lux > 0, -inf elsewhere (float32)
    """
    lux = _as_lux(lux)
    safe = torch.where(lux > 0, lux, torch.ones_like(lux))
    ev = torch.log2(safe * EV_CALIBRATION)
    return torch.where(lux > 0, ev, torch.full_like(lux, float("-inf")))


def classify_scene(lux: float) -> str:
    """Map an illuminance to a coarse lighting label (Night … Direct Sun)."""
    for upper, label in SCENE_THRESHOLDS:
        if lux < upper:
            return label
    return BRIGHTEST_SCENE
