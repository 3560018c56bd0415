from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Iterator, Literal, Mapping, NamedTuple, Sequence, Union

import numpy as np

Channel = Literal["master", "red", "green", "blue"]
InterpolationKind = Literal["monotone", "catmullRom"]

CHANNELS: tuple[Channel, ...] = ("master", "red", "green", "blue")

CHANNEL_INFO: dict[Channel, dict[str, str]] = {
    "master": {"label": "Master", "short_label": "RGB"},
    "red": {"label": "Red", "short_label": "R"},
    "green": {"label": "Green", "short_label": "G"},
    "blue": {"label": "Blue", "short_label": "B"},
}

# Minimum x-distance between neighbouring control points
MIN_POINT_DISTANCE = 5
MIN_POINTS = 2
MAX_VALUE = 255
LUT_SIZE = 256


def validate_channel(channel: str) -> Channel:
    if channel not in CHANNELS:
        raise ValueError(f"unknown channel '{channel}'")
    return channel  # type: ignore[return-value]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +inf (128.5 -> 129, -0.5 -> 0)."""
    return int(math.floor(value + 0.5))


def clamp_coordinate(value: float) -> int:
    """Clamp to [0, 255] first, then round, so infinities land on a border."""
    if math.isnan(value):
        raise ValueError("curve coordinate must be a number, got NaN")
    return round_half_up(min(max(value, 0), MAX_VALUE))


def read_only_table(values) -> np.ndarray:
    """Copy ``values`` into a uint8 array backed by immutable bytes.

    Unlike clearing ``flags.writeable`` on an owned array, the flag of an
    array over a bytes object cannot be switched back on.
    """
    return np.frombuffer(np.ascontiguousarray(values, dtype=np.uint8).tobytes(), dtype=np.uint8)


class CurvePoint(NamedTuple):
    x: int
    y: int


PointLike = Union[CurvePoint, Sequence[float], Mapping[str, float]]
ChannelPointSet = tuple[CurvePoint, ...]


def as_point(value: PointLike) -> CurvePoint:
    """Coerce an (x, y) pair, a {"x", "y"} mapping or a CurvePoint to a CurvePoint.

    Coordinates are clamped to [0, 255] and rounded half-up.
    """
    if isinstance(value, Mapping):
        x, y = value["x"], value["y"]
    else:
        x, y = value
    return CurvePoint(clamp_coordinate(x), clamp_coordinate(y))


def default_points() -> ChannelPointSet:
    return (CurvePoint(0, 0), CurvePoint(MAX_VALUE, MAX_VALUE))


@dataclass(frozen=True)
class ChannelSet:
    """Control points for all four channels.

    Instances are never mutated; every change produces a new ChannelSet that
    shares the untouched channels with its predecessor.
    """

    master: ChannelPointSet
    red: ChannelPointSet
    green: ChannelPointSet
    blue: ChannelPointSet

    @classmethod
    def default(cls) -> ChannelSet:
        return cls(*(default_points() for _ in CHANNELS))

    @classmethod
    def from_partial(
        cls,
        partial: Mapping[str, Sequence[PointLike] | None] | None,
    ) -> ChannelSet:
        """Build a ChannelSet, using the diagonal for every missing channel.

        Points are coerced and clamped but not sorted or spaced; callers that import
        external data go through the session's import policy instead.
        """
        partial = partial or {}
        for key in partial:
            validate_channel(key)
        values = []
        for channel in CHANNELS:
            pts = partial.get(channel)
            values.append(
                tuple(as_point(p) for p in pts) if pts is not None else default_points()
            )
        return cls(*values)

    def __getitem__(self, channel: str) -> ChannelPointSet:
        return getattr(self, validate_channel(channel))

    def __iter__(self) -> Iterator[Channel]:
        return iter(CHANNELS)

    def items(self) -> Iterator[tuple[Channel, ChannelPointSet]]:
        for channel in CHANNELS:
            yield channel, getattr(self, channel)

    def with_channel(self, channel: str, points: Sequence[PointLike]) -> ChannelSet:
        return replace(
            self, **{validate_channel(channel): tuple(as_point(p) for p in points)}
        )

    def to_dict(self) -> dict[str, list[dict[str, int]]]:
        return {
            channel: [{"x": p.x, "y": p.y} for p in points]
            for channel, points in self.items()
        }


@dataclass(frozen=True, eq=False)
class LUTSet:
    """Four read-only 256-entry uint8 lookup tables, one per channel."""

    master: np.ndarray
    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray

    def __post_init__(self):
        for f in fields(self):
            table = np.asarray(getattr(self, f.name), dtype=np.uint8)
            if table.shape != (LUT_SIZE,):
                raise ValueError(
                    f"LUT for channel '{f.name}' must have {LUT_SIZE} entries, got shape {table.shape}"
                )
            object.__setattr__(self, f.name, read_only_table(table))

    def __getitem__(self, channel: str) -> np.ndarray:
        return getattr(self, validate_channel(channel))

    def items(self) -> Iterator[tuple[Channel, np.ndarray]]:
        for channel in CHANNELS:
            yield channel, getattr(self, channel)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LUTSet):
            return NotImplemented
        return all(np.array_equal(self[c], other[c]) for c in CHANNELS)

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class CurveChangeData:
    """Change notification as forwarded by the UI layer."""

    points: ChannelSet
    lut: LUTSet
    active_channel: Channel
