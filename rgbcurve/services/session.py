from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from rgbcurve.services.config import CurveSessionConfig
from rgbcurve.services.lut import generate_lut
from rgbcurve.services.points import (
    insert_point,
    normalize_points,
    remove_point,
    sort_points,
    update_point,
)
from rgbcurve.services.schemas import (
    CHANNELS,
    ChannelPointSet,
    ChannelSet,
    LUTSet,
    PointLike,
    default_points,
    validate_channel,
)

ChangeListener = Callable[[ChannelSet, LUTSet], Any]


class CurveSession:
    """Owns the control points of all channels and the LUTs derived from them.

    In uncontrolled mode the session is the system of record. In controlled
    mode (``controlled_points`` given) the caller-supplied snapshot is read
    back instead of the session's own store; mutations are still computed
    from that snapshot and reported to ``on_change``, and the caller is
    expected to feed the result back through ``set_controlled_points``.

    Mutations return ``True`` when applied and ``False`` when rejected.
    Rejected mutations do not notify.
    """

    def __init__(
        self,
        config: CurveSessionConfig | None = None,
        on_change: ChangeListener | None = None,
        controlled_points: Mapping[str, Sequence[PointLike]] | ChannelSet | None = None,
    ):
        self.config = config or CurveSessionConfig()
        self.on_change = on_change
        self._internal = self._build_channel_set(self.config.default_points)
        self._controlled: ChannelSet | None = None
        self._lut_source: ChannelSet | None = None
        self._lut: LUTSet | None = None
        if controlled_points is not None:
            self.set_controlled_points(controlled_points)

    # -- reads --------------------------------------------------------------

    @property
    def controlled(self) -> bool:
        return self._controlled is not None

    @property
    def points(self) -> ChannelSet:
        return self._controlled if self._controlled is not None else self._internal

    @property
    def lut(self) -> LUTSet:
        current = self.points
        if self._lut is None or self._lut_source is not current:
            self._lut = self._generate(current)
            self._lut_source = current
        return self._lut

    def get_points(self) -> ChannelSet:
        return self.points

    def get_lut(self) -> LUTSet:
        return self.lut

    # -- mode ---------------------------------------------------------------

    def set_controlled_points(
        self, points: Mapping[str, Sequence[PointLike]] | ChannelSet
    ) -> None:
        """Adopt an external snapshot as authoritative (controlled mode).

        Each channel is sorted by x with coordinates clamped to [0, 255].
        """
        if not isinstance(points, ChannelSet):
            points = ChannelSet.from_partial(points)
        self._controlled = ChannelSet(*(sort_points(points[c]) for c in CHANNELS))

    def release_control(self) -> None:
        """Return to uncontrolled mode, keeping the last snapshot as internal state."""
        if self._controlled is not None:
            self._internal = self._controlled
            self._controlled = None

    # -- mutations ----------------------------------------------------------

    def add_point(self, channel: str, point: PointLike) -> bool:
        channel = validate_channel(channel)
        new_points = insert_point(self.points[channel], point)
        if new_points is None:
            return False
        self._commit(self.points.with_channel(channel, new_points))
        return True

    def remove_point(self, channel: str, index: int) -> bool:
        channel = validate_channel(channel)
        new_points = remove_point(self.points[channel], index)
        if new_points is None:
            return False
        self._commit(self.points.with_channel(channel, new_points))
        return True

    def update_point(self, channel: str, index: int, point: PointLike) -> bool:
        channel = validate_channel(channel)
        new_points = update_point(self.points[channel], index, point)
        if new_points is None:
            return False
        self._commit(self.points.with_channel(channel, new_points))
        return True

    def reset_channel(self, channel: str) -> bool:
        channel = validate_channel(channel)
        self._commit(self.points.with_channel(channel, default_points()))
        return True

    def reset_all(self) -> bool:
        self._commit(ChannelSet.default())
        return True

    def set_channel_points(self, channel: str, points: Sequence[PointLike]) -> bool:
        channel = validate_channel(channel)
        self._commit(self.points.with_channel(channel, self._import_channel(points)))
        return True

    def set_all_channels(
        self, partial: Mapping[str, Sequence[PointLike] | None] | ChannelSet
    ) -> bool:
        self._commit(self._build_channel_set(partial))
        return True

    # -- persistence --------------------------------------------------------

    def export_points(self) -> dict[str, list[dict[str, int]]]:
        return self.points.to_dict()

    def import_points(self, data: Mapping[str, Any] | str | bytes) -> bool:
        """Replace every channel from serialized data (mapping or JSON text)."""
        from rgbcurve.api.schemas_in import ChannelSetIn

        if isinstance(data, (str, bytes)):
            model = ChannelSetIn.model_validate_json(data)
        else:
            model = ChannelSetIn.model_validate(data)
        return self.set_all_channels(model.to_partial())

    # -- internals ----------------------------------------------------------

    def _import_channel(self, points: Sequence[PointLike]) -> ChannelPointSet:
        if self.config.import_mode == "strict":
            return normalize_points(points)
        return sort_points(points)

    def _build_channel_set(
        self, partial: Mapping[str, Sequence[PointLike] | None] | ChannelSet
    ) -> ChannelSet:
        if isinstance(partial, ChannelSet):
            partial = dict(partial.items())
        for key in partial:
            validate_channel(key)
        return ChannelSet(
            *(
                self._import_channel(partial[c]) if partial.get(c) is not None
                else default_points()
                for c in CHANNELS
            )
        )

    def _generate(self, channel_set: ChannelSet) -> LUTSet:
        logging.debug(
            "Generating %s LUTs for %s",
            self.config.interpolation,
            {c: len(p) for c, p in channel_set.items()},
        )
        return generate_lut(
            channel_set, self.config.interpolation, self.config.catmull_rom_ends
        )

    def _commit(self, new_set: ChannelSet) -> None:
        new_lut = self._generate(new_set)
        if self._controlled is None:
            self._internal = new_set
            self._lut_source = new_set
            self._lut = new_lut
        if self.on_change is not None:
            self.on_change(new_set, new_lut)
