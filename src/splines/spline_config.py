import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

DEFAULT_RESOLUTION = 30  # guideline range is 20-50 samples
MIN_RESOLUTION = 2


class InterpolationScheme(Enum):
    CATMULL_ROM = "catmull_rom"
    BEZIER = "bezier"

    @classmethod
    def parse(cls, value: Union["InterpolationScheme", str]) -> "InterpolationScheme":
        """
        Convert a scheme name such as "Catmull-Rom" or "bezier" to the enum

        Raises:
            ValueError: If the name does not match any scheme
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown interpolation scheme: {value!r}")

        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        if key == "catmullrom":
            key = cls.CATMULL_ROM.value
        for scheme in cls:
            if scheme.value == key:
                return scheme
        raise ValueError(f"Unknown interpolation scheme: {value!r}")


def validate_resolution(resolution: Any) -> int:
    if isinstance(resolution, bool) or not isinstance(resolution, numbers.Integral):
        raise ValueError(f"Resolution must be an integer, got {resolution!r}")
    if resolution < MIN_RESOLUTION:
        raise ValueError(
            f"Resolution must be at least {MIN_RESOLUTION}, got {resolution}"
        )
    return int(resolution)


@dataclass
class SplineConfig:
    """Options a host passes when it creates a spline"""

    scheme: InterpolationScheme = InterpolationScheme.CATMULL_ROM
    resolution: int = DEFAULT_RESOLUTION
    closed: bool = False

    def __post_init__(self):
        self.scheme = InterpolationScheme.parse(self.scheme)
        self.resolution = validate_resolution(self.resolution)
        self.closed = bool(self.closed)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "SplineConfig":
        """
        Build a config from a mapping such as the "spline" section of config.yaml.
        Missing keys keep their defaults, unknown keys are ignored.
        """
        kwargs = {}
        for key in ("scheme", "resolution", "closed"):
            if key in values and values[key] is not None:
                kwargs[key] = values[key]
        return cls(**kwargs)

    @classmethod
    def from_config_manager(cls, config_manager) -> "SplineConfig":
        return cls.from_dict(config_manager.get_section("spline", default={}) or {})

    def to_dict(self) -> dict:
        return {
            "scheme": self.scheme.value,
            "resolution": self.resolution,
            "closed": self.closed,
        }
