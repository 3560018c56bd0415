from __future__ import annotations

from pydantic import BaseModel, Field

from rgbcurve.services.schemas import ChannelSet, LUTSet


class CurvePointOut(BaseModel):
    x: int = Field(ge=0, le=255)
    y: int = Field(ge=0, le=255)


class ChannelSetOut(BaseModel):
    master: list[CurvePointOut]
    red: list[CurvePointOut]
    green: list[CurvePointOut]
    blue: list[CurvePointOut]

    @classmethod
    def from_channel_set(cls, channel_set: ChannelSet) -> ChannelSetOut:
        return cls.model_validate(channel_set.to_dict())


class LUTSetOut(BaseModel):
    master: list[int] = Field(min_length=256, max_length=256)
    red: list[int] = Field(min_length=256, max_length=256)
    green: list[int] = Field(min_length=256, max_length=256)
    blue: list[int] = Field(min_length=256, max_length=256)

    @classmethod
    def from_lut_set(cls, lut: LUTSet) -> LUTSetOut:
        return cls(**{channel: table.tolist() for channel, table in lut.items()})


def channel_set_to_dict(channel_set: ChannelSet) -> dict:
    return ChannelSetOut.from_channel_set(channel_set).model_dump()
