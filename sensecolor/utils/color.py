"""Color space conversions for raw tristimulus sensor samples.

Provides:
    - Raw channel normalization against the sensor's declared max range
    - sRGB → linear RGB (exact sRGB transfer function)
    - Linear RGB → CIE XYZ (sRGB primaries, D65 illuminant)
    - XYZ → CIE L*a*b* (D65 reference white)
    - RGB → HSV (hue in degrees)

Used by:
    - readings.conversions: color branch of every incoming sample

All conversions operate on float32 torch tensors whose last dimension holds
the three channels, i.e. shape (3,) for one sample or (N, 3) for a batch.

Invariants:
    - Normalized RGB is in [0, 1] whenever max_range > 0
    - No function raises on numeric edge cases (zero, black, saturated input)
    - Lab coordinates: L roughly [0, 100], a,b unbounded but small
"""

from typing import List, Sequence, Union

import torch
import torch.nn.functional as F


# sRGB → XYZ matrix (D65), rows produce X, Y, Z
SRGB_TO_XYZ = (
    (0.4124, 0.3576, 0.1805),
    (0.2126, 0.7152, 0.0722),
    (0.0193, 0.1192, 0.9505),
)

# Reference white (D65), X Y Z
D65_WHITE = (0.95047, 1.0, 1.08883)

# CIE constants, exact rationals
LAB_EPSILON = 216.0 / 24389.0
LAB_KAPPA = 24389.0 / 27.0

SRGB_BREAKPOINT = 0.04045

TensorLike = Union[torch.Tensor, Sequence[float], float]


def as_channels(values: TensorLike, channels: int = 3) -> torch.Tensor:
    """Coerce raw values to a float32 tensor with exactly `channels` channels.

    Parameters
    ----------
    values : Tensor or sequence of float
        Raw sample(s), shape (C,) or (N, C). A bare float is one channel.
    channels : int
        Number of leading channels to keep, default 3

    Returns
    -------
    torch.Tensor
        Shape (..., channels), float32. Extra channels are dropped, missing
        channels are zero-filled.
    """
    t = torch.as_tensor(values, dtype=torch.float32)
    if t.ndim == 0:
        t = t.reshape(1)
    t = t[..., :channels]
    missing = channels - t.shape[-1]
    if missing > 0:
        t = F.pad(t, (0, missing), value=0.0)
    return t


def as_float32_values(values: Sequence[float]) -> List[float]:
    """Round raw values to float32, the precision every conversion runs at."""
    return torch.as_tensor(values, dtype=torch.float32).reshape(-1).tolist()


def normalize_rgb(values: TensorLike, max_range: float) -> torch.Tensor:
    """Scale raw R, G, B counts to [0, 1] using the sensor's max range.

    Parameters
    ----------
    values : Tensor or sequence of float
        Raw channels (R, G, B, [Clear, ...]); only the first three are used
    max_range : float
        Sensor's maximum reportable value. <= 0 means uncalibrated.

    Returns
    -------
    torch.Tensor
        Shape (..., 3). Negative inputs are floored at 0. With max_range <= 0
        the floored raw values pass through unscaled.
    """
    rgb = torch.clamp(as_channels(values), min=0.0)
    if max_range <= 0:
        return rgb
    return torch.clamp(rgb / float(max_range), 0.0, 1.0)


def linearize(channel: torch.Tensor) -> torch.Tensor:
    """Decode sRGB-encoded values to linear light.

    Parameters
    ----------
    channel : torch.Tensor
        sRGB values, any shape

    Returns
    -------
    torch.Tensor
        Linear values, same shape

    Notes
    -----
    Linear segment below the breakpoint: c / 12.92
    Power segment above it: ((c + 0.055) / 1.055)^2.4
    Unlike display-side conversions, input is not clamped: uncalibrated
    sensors deliver values well above 1.
    """
    channel = torch.as_tensor(channel, dtype=torch.float32)
    linear = channel / 12.92
    power = torch.pow((channel + 0.055) / 1.055, 2.4)
    return torch.where(channel <= SRGB_BREAKPOINT, linear, power)


def rgb_to_xyz(rgb: torch.Tensor) -> torch.Tensor:
    """Convert sRGB-encoded RGB to CIE XYZ (D65).

    Parameters
    ----------
    rgb : torch.Tensor
        Shape (..., 3), sRGB-encoded, nominally [0, 1]

    Returns
    -------
    torch.Tensor
        XYZ, shape (..., 3). White (1, 1, 1) maps to ~(0.9505, 1.0, 1.089).
    """
    linear = linearize(rgb)
    mat = torch.tensor(SRGB_TO_XYZ, dtype=linear.dtype, device=linear.device)
    return torch.matmul(linear, mat.T)


def _lab_f(t: torch.Tensor) -> torch.Tensor:
    # Cube root above epsilon, CIE linear segment at or below it
    cube_root = torch.pow(torch.clamp(t, min=0.0), 1.0 / 3.0)
    linear = (LAB_KAPPA * t + 16.0) / 116.0
    return torch.where(t > LAB_EPSILON, cube_root, linear)


def xyz_to_lab(xyz: torch.Tensor) -> torch.Tensor:
    """Convert XYZ to CIE L*a*b* against the D65 white.

    Parameters
    ----------
    xyz : torch.Tensor
        Shape (..., 3)

    Returns
    -------
    torch.Tensor
        Lab, shape (..., 3)
    """
    xyz = torch.as_tensor(xyz, dtype=torch.float32)
    ref = torch.tensor(D65_WHITE, dtype=xyz.dtype, device=xyz.device)
    f = _lab_f(xyz / ref)
    fx, fy, fz = f.unbind(-1)

    L = 116.0 * fy - 16.0
    a = 500.0 * (fx - fy)
    b = 200.0 * (fy - fz)
    return torch.stack([L, a, b], dim=-1)


def rgb_to_hsv(rgb: torch.Tensor) -> torch.Tensor:
    """Convert RGB to HSV.

    Parameters
    ----------
    rgb : torch.Tensor
        Shape (..., 3)

    Returns
    -------
    torch.Tensor
        Shape (..., 3): hue in degrees [0, 360), saturation and value in [0, 1]
        for normalized input.

    Notes
    -----
    The hue sector is picked with exact float equality against the channel
    maximum, checking R, then G, then B. Ties resolve to the earliest channel.
    Black and greys get hue 0; black gets saturation 0.
    """
    rgb = torch.as_tensor(rgb, dtype=torch.float32)
    r, g, b = rgb.unbind(-1)

    cmax = torch.maximum(torch.maximum(r, g), b)
    cmin = torch.minimum(torch.minimum(r, g), b)
    delta = cmax - cmin

    zeros = torch.zeros_like(delta)
    safe_delta = torch.where(delta == 0, torch.ones_like(delta), delta)

    sector = torch.where(
        cmax == r,
        torch.fmod((g - b) / safe_delta, 6.0),
        torch.where(
            cmax == g,
            (b - r) / safe_delta + 2.0,
            (r - g) / safe_delta + 4.0,
        ),
    )
    hue = torch.where(delta == 0, zeros, sector) * 60.0
    hue = torch.where(hue < 0, hue + 360.0, hue)
    # A tiny negative sector rounds to exactly 360 in float32
    hue = torch.where(hue >= 360.0, hue - 360.0, hue)

    safe_max = torch.where(cmax == 0, torch.ones_like(cmax), cmax)
    saturation = torch.where(cmax == 0, zeros, delta / safe_max)

    return torch.stack([hue, saturation, cmax], dim=-1)
