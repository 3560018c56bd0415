from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from rgbcurve.services.schemas import CurvePoint, clamp_coordinate


class CurvePointIn(BaseModel):
    """A control point as found in saved curve data.

    Accepts ``{"x": .., "y": ..}`` or an ``[x, y]`` pair. Coordinates outside
    [0, 255] are clamped rather than rejected.
    """

    model_config = ConfigDict(extra="forbid")

    x: int
    y: int

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            if len(v) != 2:
                raise ValueError("point must be an [x, y] pair")
            return {"x": v[0], "y": v[1]}
        return v

    @field_validator("x", "y", mode="before")
    @classmethod
    def _clamp(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return v
        return clamp_coordinate(v)

    def to_point(self) -> CurvePoint:
        return CurvePoint(self.x, self.y)


class ChannelSetIn(BaseModel):
    """Saved control points for up to four channels; unknown keys are errors."""

    model_config = ConfigDict(extra="forbid")

    master: list[CurvePointIn] | None = None
    red: list[CurvePointIn] | None = None
    green: list[CurvePointIn] | None = None
    blue: list[CurvePointIn] | None = None

    def to_partial(self) -> dict[str, list[CurvePoint]]:
        return {
            channel: [p.to_point() for p in points]
            for channel, points in (
                ("master", self.master),
                ("red", self.red),
                ("green", self.green),
                ("blue", self.blue),
            )
            if points is not None
        }
