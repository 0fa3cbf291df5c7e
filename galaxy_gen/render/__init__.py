"""Rendering of generated point clouds."""

from galaxy_gen.render.points import PointsRenderer

__all__ = ["PointsRenderer"]
