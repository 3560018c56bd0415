from rgbcurve.services.schemas import (
    CHANNEL_INFO,
    CHANNELS,
    LUT_SIZE,
    MAX_VALUE,
    MIN_POINT_DISTANCE,
    MIN_POINTS,
    Channel,
    ChannelPointSet,
    ChannelSet,
    CurveChangeData,
    CurvePoint,
    InterpolationKind,
    LUTSet,
    as_point,
    default_points,
)
from rgbcurve.services.points import (
    clamp,
    find_insert_index,
    insert_point,
    is_point_near,
    normalize_points,
    remove_point,
    sort_points,
    update_point,
)
from rgbcurve.services.interpolation import (
    INTERPOLATION_KINDS,
    catmull_rom_curve,
    catmull_rom_interpolation,
    get_curve_sampler,
    get_interpolator,
    monotone_cubic_curve,
    monotone_cubic_interpolation,
)
from rgbcurve.services.lut import (
    apply_lut,
    compose_channel_tables,
    generate_channel_lut,
    generate_lut,
    identity_lut_set,
)
from rgbcurve.services.config import CurveSessionConfig, ImportMode
from rgbcurve.services.session import CurveSession

__all__ = [
    "CHANNEL_INFO",
    "CHANNELS",
    "INTERPOLATION_KINDS",
    "LUT_SIZE",
    "MAX_VALUE",
    "MIN_POINT_DISTANCE",
    "MIN_POINTS",
    "Channel",
    "ChannelPointSet",
    "ChannelSet",
    "CurveChangeData",
    "CurvePoint",
    "CurveSession",
    "CurveSessionConfig",
    "ImportMode",
    "InterpolationKind",
    "LUTSet",
    "apply_lut",
    "as_point",
    "catmull_rom_curve",
    "catmull_rom_interpolation",
    "clamp",
    "compose_channel_tables",
    "default_points",
    "find_insert_index",
    "generate_channel_lut",
    "generate_lut",
    "get_curve_sampler",
    "get_interpolator",
    "identity_lut_set",
    "insert_point",
    "is_point_near",
    "monotone_cubic_curve",
    "monotone_cubic_interpolation",
    "normalize_points",
    "remove_point",
    "sort_points",
    "update_point",
]
