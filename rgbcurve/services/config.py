from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping, Sequence

from rgbcurve.services.interpolation import INTERPOLATION_KINDS, CatmullRomEnds
from rgbcurve.services.schemas import InterpolationKind, PointLike, validate_channel

ImportMode = Literal["strict", "trusting"]

IMPORT_MODES = ("strict", "trusting")
CATMULL_ROM_ENDS = ("clamp", "mirror")


@dataclass(frozen=True)
class CurveSessionConfig:
    """Resolved session options.

    interpolation:    "monotone" or "catmullRom", shared by all channels.
    import_mode:      "trusting" only sorts externally supplied points,
                      "strict" also re-applies clamping, endpoint anchoring
                      and minimum spacing.
    catmull_rom_ends: phantom end point policy of the Catmull-Rom spline.
    default_points:   initial points per channel; missing channels start
                      on the diagonal.
    """

    interpolation: InterpolationKind = "monotone"
    import_mode: ImportMode = "trusting"
    catmull_rom_ends: CatmullRomEnds = "mirror"
    default_points: Mapping[str, Sequence[PointLike]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self):
        if self.interpolation not in INTERPOLATION_KINDS:
            raise ValueError(
                f"unknown interpolation '{self.interpolation}', expected one of {INTERPOLATION_KINDS}"
            )
        if self.import_mode not in IMPORT_MODES:
            raise ValueError(
                f"unknown import mode '{self.import_mode}', expected one of {IMPORT_MODES}"
            )
        if self.catmull_rom_ends not in CATMULL_ROM_ENDS:
            raise ValueError(
                f"unknown Catmull-Rom end policy '{self.catmull_rom_ends}', expected one of {CATMULL_ROM_ENDS}"
            )
        for channel in self.default_points:
            validate_channel(channel)
        object.__setattr__(
            self, "default_points", MappingProxyType(dict(self.default_points))
        )

    @classmethod
    def resolve(cls, **options: Any) -> CurveSessionConfig:
        """Build a config from optional keyword values, ignoring ``None``."""
        return cls(**{k: v for k, v in options.items() if v is not None})
