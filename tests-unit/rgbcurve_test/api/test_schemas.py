"""Tests for curve import/export models."""
import json

import pytest
from pydantic import ValidationError

from rgbcurve.api import ChannelSetIn, ChannelSetOut, LUTSetOut, channel_set_to_dict
from rgbcurve.services import ChannelSet, CurvePoint, CurveSession, identity_lut_set


class TestChannelSetIn:
    def test_accepts_dicts_and_pairs(self):
        model = ChannelSetIn.model_validate(
            {"red": [{"x": 0, "y": 0}, [128, 200], [255, 255]]}
        )
        assert model.to_partial() == {
            "red": [CurvePoint(0, 0), CurvePoint(128, 200), CurvePoint(255, 255)]
        }

    def test_clamps_coordinates(self):
        model = ChannelSetIn.model_validate({"blue": [[-10, 300], [400, 12.6]]})
        assert model.to_partial()["blue"] == [CurvePoint(0, 255), CurvePoint(255, 13)]

    def test_clamps_infinite_coordinates(self):
        model = ChannelSetIn.model_validate({"red": [[float("inf"), 0], [255, float("-inf")]]})
        assert model.to_partial()["red"] == [CurvePoint(255, 0), CurvePoint(255, 0)]

    def test_rejects_nan_coordinate(self):
        with pytest.raises(ValidationError):
            ChannelSetIn.model_validate({"red": [[float("nan"), 0], [255, 255]]})

    def test_rejects_unknown_channel(self):
        with pytest.raises(ValidationError):
            ChannelSetIn.model_validate({"alpha": [[0, 0], [255, 255]]})

    def test_rejects_malformed_point(self):
        with pytest.raises(ValidationError):
            ChannelSetIn.model_validate({"red": [[0, 0, 0]]})
        with pytest.raises(ValidationError):
            ChannelSetIn.model_validate({"red": [{"x": "dark", "y": 0}]})

    def test_missing_channels_absent_from_partial(self):
        assert ChannelSetIn.model_validate({}).to_partial() == {}


class TestExport:
    def test_channel_set_to_dict(self):
        channels = ChannelSet.default().with_channel("green", [(0, 0), (64, 90), (255, 255)])
        data = channel_set_to_dict(channels)
        assert data["green"][1] == {"x": 64, "y": 90}
        assert data["master"] == [{"x": 0, "y": 0}, {"x": 255, "y": 255}]

    def test_round_trip_through_json(self):
        channels = ChannelSet.default().with_channel("red", [(0, 10), (100, 180), (255, 240)])
        text = ChannelSetOut.from_channel_set(channels).model_dump_json()
        restored = ChannelSet.from_partial(ChannelSetIn.model_validate_json(text).to_partial())
        assert restored == channels

    def test_lut_export(self):
        out = LUTSetOut.from_lut_set(identity_lut_set())
        assert out.red == list(range(256))


class TestSessionPersistence:
    def test_export_import(self, curve_session: CurveSession, changes):
        curve_session.add_point("red", (128, 200))
        saved = json.dumps(curve_session.export_points())

        other = CurveSession()
        assert other.import_points(saved)
        assert other.points == curve_session.points
        assert other.lut == curve_session.lut

    def test_import_fills_missing_channels(self, curve_session: CurveSession):
        curve_session.add_point("master", (128, 64))
        curve_session.import_points({"red": [[0, 0], [60, 90], [255, 255]]})
        assert curve_session.points.master == ChannelSet.default().master
        assert curve_session.points.red[1] == CurvePoint(60, 90)

    def test_strict_import_anchors_endpoints(self, strict_session: CurveSession):
        strict_session.import_points({"green": [[10, 0], [128, 128], [240, 255]]})
        assert strict_session.points.green == (
            CurvePoint(0, 0), CurvePoint(128, 128), CurvePoint(255, 255)
        )

    def test_trusting_import_only_sorts(self, curve_session: CurveSession):
        curve_session.import_points({"green": [[240, 255], [10, 0]]})
        assert curve_session.points.green == (CurvePoint(10, 0), CurvePoint(240, 255))

    def test_import_clamps_overflowing_numbers(self, curve_session: CurveSession):
        # json.loads turns 1e999 into inf
        assert curve_session.import_points(json.loads('{"red": [[1e999, 0], [0, 1e999]]}'))
        assert curve_session.points.red == (CurvePoint(0, 255), CurvePoint(255, 0))

    def test_invalid_import_leaves_state(self, curve_session: CurveSession, changes):
        with pytest.raises(ValidationError):
            curve_session.import_points('{"red": "nope"}')
        assert curve_session.points == ChannelSet.default()
        assert changes == []
