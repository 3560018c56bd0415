from rgbcurve.image import apply_lut_to_image, compute_histogram
from rgbcurve.services import (
    CHANNEL_INFO,
    CHANNELS,
    MIN_POINT_DISTANCE,
    ChannelSet,
    CurveChangeData,
    CurvePoint,
    CurveSession,
    CurveSessionConfig,
    LUTSet,
    apply_lut,
    catmull_rom_interpolation,
    generate_channel_lut,
    generate_lut,
    identity_lut_set,
    monotone_cubic_interpolation,
)

__all__ = [
    "CHANNEL_INFO",
    "CHANNELS",
    "MIN_POINT_DISTANCE",
    "ChannelSet",
    "CurveChangeData",
    "CurvePoint",
    "CurveSession",
    "CurveSessionConfig",
    "LUTSet",
    "apply_lut",
    "apply_lut_to_image",
    "catmull_rom_interpolation",
    "compute_histogram",
    "generate_channel_lut",
    "generate_lut",
    "identity_lut_set",
    "monotone_cubic_interpolation",
]
