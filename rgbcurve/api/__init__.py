from rgbcurve.api.schemas_in import ChannelSetIn, CurvePointIn
from rgbcurve.api.schemas_out import (
    ChannelSetOut,
    CurvePointOut,
    LUTSetOut,
    channel_set_to_dict,
)

__all__ = [
    "ChannelSetIn",
    "ChannelSetOut",
    "CurvePointIn",
    "CurvePointOut",
    "LUTSetOut",
    "channel_set_to_dict",
]
