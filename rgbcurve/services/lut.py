from __future__ import annotations

from typing import Sequence

import numpy as np

from rgbcurve.services.interpolation import CatmullRomEnds, get_curve_sampler
from rgbcurve.services.points import clamp
from rgbcurve.services.schemas import (
    CHANNELS,
    LUT_SIZE,
    MAX_VALUE,
    ChannelSet,
    InterpolationKind,
    LUTSet,
    PointLike,
    read_only_table,
)


def generate_channel_lut(
    points: Sequence[PointLike],
    interpolation: InterpolationKind = "monotone",
    catmull_rom_ends: CatmullRomEnds = "mirror",
) -> np.ndarray:
    """Sample the selected interpolator at every input level 0..255."""
    sample = get_curve_sampler(interpolation, catmull_rom_ends)
    return read_only_table(sample(points, np.arange(LUT_SIZE)))


def generate_lut(
    channel_set: ChannelSet,
    interpolation: InterpolationKind = "monotone",
    catmull_rom_ends: CatmullRomEnds = "mirror",
) -> LUTSet:
    return LUTSet(
        **{
            channel: generate_channel_lut(channel_set[channel], interpolation, catmull_rom_ends)
            for channel in CHANNELS
        }
    )


def identity_lut_set() -> LUTSet:
    ramp = np.arange(LUT_SIZE, dtype=np.uint8)
    return LUTSet(master=ramp, red=ramp, green=ramp, blue=ramp)


def apply_lut(r: float, g: float, b: float, lut: LUTSet) -> tuple[int, int, int]:
    """Map one RGB triple through its channel table, then through master."""
    new_r = lut.red[int(clamp(r, 0, MAX_VALUE))]
    new_g = lut.green[int(clamp(g, 0, MAX_VALUE))]
    new_b = lut.blue[int(clamp(b, 0, MAX_VALUE))]

    return (
        int(lut.master[new_r]),
        int(lut.master[new_g]),
        int(lut.master[new_b]),
    )


def compose_channel_tables(lut: LUTSet) -> np.ndarray:
    """Per-channel tables already passed through master, shape (3, 256), rows r, g, b."""
    return np.stack([lut.master[lut.red], lut.master[lut.green], lut.master[lut.blue]])
