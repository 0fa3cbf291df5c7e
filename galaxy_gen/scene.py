"""Scene state: parameters, the current point cloud and its rotation."""

import time
from dataclasses import fields, replace
from typing import Any, Callable, List, Optional

from galaxy_gen.generator import PointCloud, generate
from galaxy_gen.params import GalaxyParameters, clamp_value


# Per-frame spin increment and ceiling for the auto-spin animation
AUTO_SPIN_STEP = 0.01
AUTO_SPIN_LIMIT = 5.0


class Clock:
    """Elapsed wall time since creation (or the last reset)."""

    def __init__(self, time_fn: Callable[[], float] = time.perf_counter):
        self._time_fn = time_fn
        self._start = time_fn()

    def reset(self):
        self._start = self._time_fn()

    def elapsed(self) -> float:
        return self._time_fn() - self._start


class GalaxyScene:
    """Owns the galaxy parameters and the single current point cloud.

    The parameter panel never mutates parameters directly; it calls
    :meth:`set_and_regenerate`. Replacing the cloud goes through
    :meth:`regenerate`, which swaps the new cloud in and releases the old
    one in a single step.
    """

    def __init__(
        self,
        params: Optional[GalaxyParameters] = None,
        rng=None,
        generator: Callable = generate,
    ):
        """Initialize scene and generate the first cloud.

        Args:
            params: Initial parameters (default: GalaxyParameters()),
                clamped to the panel ranges
            rng: Random source passed to the generator
            generator: Callable ``(params, rng) -> PointCloud``
        """
        if rng is None:
            from galaxy_gen.utils.reproducibility import create_random_source
            rng = create_random_source()
        params = params if params is not None else GalaxyParameters()
        # Same domains the parameter panel enforces
        self._params = params.clamped()
        self.rng = rng
        self.generator = generator
        self.rotation = 0.0
        self._current: Optional[PointCloud] = None
        self._listeners: List[Callable[[Optional[PointCloud], PointCloud], Any]] = []
        self.regenerate()

    @property
    def params(self) -> GalaxyParameters:
        """Copy of the current parameters."""
        return replace(self._params)

    @property
    def current(self) -> PointCloud:
        return self._current

    def add_listener(self, callback: Callable[[Optional[PointCloud], PointCloud], Any]):
        """Register ``callback(old, new)`` called after each swap.

        Listeners release whatever they built from ``old`` (e.g. render
        artists) and install ``new``.
        """
        self._listeners.append(callback)

    def regenerate(self) -> PointCloud:
        """Generate a new cloud and swap it in, releasing the previous one.

        If generation raises, the previous cloud stays installed and the
        exception propagates.
        """
        return self._install(self.generator(replace(self._params), self.rng))

    def _install(self, cloud: PointCloud) -> PointCloud:
        """Swap ``cloud`` into the slot and notify listeners."""
        old, self._current = self._current, cloud
        for callback in self._listeners:
            callback(old, cloud)
        return cloud

    def would_change(self, field: str, value: Any) -> bool:
        """Whether committing ``value`` to ``field`` changes the parameters."""
        return clamp_value(field, value) != getattr(self._params, field)

    def set_and_regenerate(self, field: str, value: Any) -> PointCloud:
        """Commit a single parameter change and regenerate.

        Args:
            field: Parameter name (e.g. 'count', 'spin', 'inside_color')
            value: New value, clamped to the field's range

        Raises:
            KeyError: If ``field`` is not a galaxy parameter
        """
        return self.update(**{field: value})

    def update(self, **changes) -> PointCloud:
        """Commit several parameter changes with one regeneration.

        Nothing changes if the new values cannot be generated. Once a
        cloud is generated, parameters and cloud are installed together,
        even if a listener raises afterwards.
        """
        known = {f.name for f in fields(GalaxyParameters)}
        for name in changes:
            if name not in known:
                raise KeyError(f"Unknown galaxy parameter: {name}")
        changes = {name: clamp_value(name, value) for name, value in changes.items()}
        params = replace(self._params, **changes)
        cloud = self.generator(replace(params), self.rng)
        self._params = params
        return self._install(cloud)

    def tick(self, elapsed: float) -> float:
        """Advance the per-frame rotation about the vertical axis.

        Args:
            elapsed: Seconds since start

        Returns:
            Rotation angle in radians
        """
        self.rotation = elapsed / 2
        return self.rotation

    def advance_spin(self, step: float = AUTO_SPIN_STEP, limit: float = AUTO_SPIN_LIMIT) -> bool:
        """Increase spin by ``step`` and regenerate while spin is below ``limit``.

        Returns:
            True if the cloud was regenerated
        """
        if self._params.spin >= limit:
            return False
        self.set_and_regenerate("spin", min(self._params.spin + step, limit))
        return True
