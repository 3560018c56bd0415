import pytest

from rgbcurve.services import ChannelSet, CurveSession, CurveSessionConfig


@pytest.fixture
def changes():
    """Records every (points, lut) notification."""
    return []


@pytest.fixture
def curve_session(changes) -> CurveSession:
    return CurveSession(on_change=lambda points, lut: changes.append((points, lut)))


@pytest.fixture
def strict_session(changes) -> CurveSession:
    return CurveSession(
        config=CurveSessionConfig(import_mode="strict"),
        on_change=lambda points, lut: changes.append((points, lut)),
    )


@pytest.fixture
def default_channels() -> ChannelSet:
    return ChannelSet.default()
