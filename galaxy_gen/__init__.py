"""
Galaxy Generator - procedural spiral galaxy point clouds.

Features:
- Vectorized NumPy generator with an injectable random source
- Scene with atomic swap-and-release regeneration
- matplotlib 3D rendering with additive-looking glow
- tkinter parameter panel with orbiting view
- Export to PNG/GIF
- CLI and GUI interfaces
"""

__version__ = "0.1.0"

from galaxy_gen.params import GalaxyParameters
from galaxy_gen.generator import GalaxyGenerator, PointCloud, generate
from galaxy_gen.scene import GalaxyScene

__all__ = [
    "GalaxyParameters",
    "GalaxyGenerator",
    "PointCloud",
    "generate",
    "GalaxyScene",
]
