"""Galaxy generation parameters."""

import warnings
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Tuple

import numpy as np
from matplotlib.colors import to_rgb


# (min, max, step) for every numeric field, matching the parameter panel
PARAMETER_RANGES: Dict[str, Tuple[float, float, float]] = {
    "count": (100, 100000, 100),
    "size": (0.01, 0.1, 0.01),
    "radius": (1, 10, 1),
    "branches": (2, 10, 1),
    "spin": (-5, 5, 0.001),
    "randomness": (0, 2, 0.001),
    "randomness_power": (1, 10, 0.001),
}

INTEGER_FIELDS = ("count", "branches")
COLOR_FIELDS = ("inside_color", "outside_color")


@dataclass
class GalaxyParameters:
    """Parameters of the spiral galaxy point cloud.

    Attributes:
        count: Number of points
        size: Point render size (passed through to the renderer)
        radius: Outer radius of the galaxy
        branches: Number of spiral arms
        spin: Angular twist per unit radius (negative reverses the twist)
        randomness: Scatter amplitude relative to a point's radius
        randomness_power: Exponent concentrating scatter near the arms
        inside_color: Color at the center
        outside_color: Color at the outer radius
    """
    count: int = 23000
    size: float = 0.04
    radius: float = 5.0
    branches: int = 3
    spin: float = 1.241
    randomness: float = 0.387
    randomness_power: float = 2.088
    inside_color: str = "#ff6030"
    outside_color: str = "#1b3984"

    @property
    def inside_rgb(self) -> np.ndarray:
        return np.array(to_rgb(self.inside_color))

    @property
    def outside_rgb(self) -> np.ndarray:
        return np.array(to_rgb(self.outside_color))

    def validate(self):
        """Check the values the generator cannot accept.

        Raises:
            ValueError: If count is negative, branches is below one,
                or a color cannot be parsed
        """
        if self.count < 0:
            raise ValueError(f"count must be >= 0, got {self.count}")
        if self.branches < 1:
            raise ValueError(f"branches must be >= 1, got {self.branches}")
        for name in COLOR_FIELDS:
            value = getattr(self, name)
            try:
                to_rgb(value)
            except ValueError:
                raise ValueError(f"Invalid color for {name}: {value!r}")

    def clamped(self) -> "GalaxyParameters":
        """Return a copy snapped to each field's step and clamped to its range."""
        changes = {}
        for name in PARAMETER_RANGES:
            value = getattr(self, name)
            new_value = clamp_value(name, value)
            if new_value != value:
                changes[name] = new_value
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GalaxyParameters":
        """Build parameters from a dict, accepting camelCase keys as well."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (data or {}).items():
            name = _snake_case(key)
            if name not in known:
                raise KeyError(f"Unknown galaxy parameter: {key}")
            kwargs[name] = value
        return cls(**kwargs)


def clamp_value(name: str, value: Any) -> Any:
    """Clamp a numeric parameter to its range and snap it to its step.

    Colors are returned unchanged. A UserWarning is emitted when the
    value had to be moved back into its range.
    """
    if name in COLOR_FIELDS:
        return value
    if name not in PARAMETER_RANGES:
        raise KeyError(f"Unknown galaxy parameter: {name}")

    lo, hi, step = PARAMETER_RANGES[name]
    value = float(value)
    if value < lo or value > hi:
        warnings.warn(
            f"{name}={value} is outside [{lo}, {hi}], clamping",
            UserWarning
        )
    value = min(max(value, lo), hi)
    # Snap relative to the lower bound like a stepped slider
    value = lo + round((value - lo) / step) * step
    value = min(value, hi)
    if name in INTEGER_FIELDS:
        return int(round(value))
    # Strip float noise from the step multiplication
    decimals = max(0, -int(np.floor(np.log10(step))))
    return round(value, decimals)


def _snake_case(key: str) -> str:
    out = []
    for ch in key:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)
