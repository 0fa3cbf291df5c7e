"""3D point-cloud renderer using matplotlib."""

import numpy as np
from matplotlib.figure import Figure
from matplotlib.backends.backend_agg import FigureCanvasAgg
from typing import Optional, Tuple

from galaxy_gen.generator import PointCloud
from galaxy_gen.render.base import Renderer


# Perspective camera the point sizes are attenuated for
CAMERA_FOV = 75.0
CAMERA_POSITION = (0.0, 8.0, 8.0)
CAMERA_DISTANCE = float(np.linalg.norm(CAMERA_POSITION))


def to_display_axes(positions: np.ndarray) -> np.ndarray:
    """Map y-up galaxy coordinates to matplotlib's z-up axes.

    (x, y, z) -> (x, -z, y) keeps the frame right-handed, so a camera at
    (0, 8, 8) becomes elevation 45 degrees, azimuth -90.
    """
    out = np.empty_like(positions)
    out[:, 0] = positions[:, 0]
    out[:, 1] = -positions[:, 2]
    out[:, 2] = positions[:, 1]
    return out


def marker_area(size: float, height_px: float, dpi: float,
                distance: float = CAMERA_DISTANCE, fov: float = CAMERA_FOV) -> float:
    """Scatter marker area (points^2) for a world-space point size.

    A point of world size ``size`` seen at ``distance`` through a
    perspective camera of vertical ``fov`` covers
    ``size * height_px / (2 * tan(fov / 2) * distance)`` pixels.
    """
    pixels = size * height_px / (2 * np.tan(np.radians(fov) / 2) * distance)
    points = max(pixels, 0.5) * 72.0 / dpi
    return points ** 2


class PointsRenderer(Renderer):
    """Renders a PointCloud as glowing points on a black background."""

    def __init__(
        self,
        figure: Optional[Figure] = None,
        figsize: Tuple[float, float] = (10.0, 8.0),
        dpi: int = 100,
        elevation: float = 45.0,
        azimuth: float = -90.0,
        alpha: float = 0.6,
        glow: bool = True,
        glow_scale: float = 6.0,
        glow_alpha: float = 0.04,
    ):
        """Initialize renderer.

        Args:
            figure: Figure to draw into (default: new Agg-backed figure)
            figsize: Figure size when creating a figure
            dpi: Dots per inch when creating a figure
            elevation: Camera elevation angle
            azimuth: Camera azimuth angle
            alpha: Point opacity
            glow: Draw a second, larger and fainter pass under the points
            glow_scale: Area multiplier of the glow pass
            glow_alpha: Opacity of the glow pass
        """
        if figure is None:
            figure = Figure(figsize=figsize, dpi=dpi)
            FigureCanvasAgg(figure)
        self.fig = figure
        self.elevation = elevation
        self.azimuth = azimuth
        self.alpha = alpha
        self.glow = glow
        self.glow_scale = glow_scale
        self.glow_alpha = glow_alpha
        self.cloud: Optional[PointCloud] = None
        self.scatter = None
        self.glow_scatter = None
        self.ax = None
        self._setup_axes()

    def _setup_axes(self):
        self.fig.patch.set_facecolor('black')
        self.ax = self.fig.add_subplot(111, projection='3d')
        self.ax.set_facecolor('black')
        self.ax.set_axis_off()
        self.ax.set_box_aspect((1, 1, 1))
        self.ax.view_init(elev=self.elevation, azim=self.azimuth)
        self.fig.subplots_adjust(left=0, right=1, bottom=0, top=1)

    def _release(self):
        """Remove the artists built from the installed cloud."""
        for artist in (self.scatter, self.glow_scatter):
            if artist is not None:
                artist.remove()
        self.scatter = None
        self.glow_scatter = None
        self.cloud = None

    def _marker_area(self) -> float:
        height_px = self.fig.get_figheight() * self.fig.dpi
        return marker_area(self.cloud.size, height_px, self.fig.dpi)

    def set_cloud(self, old: Optional[PointCloud], new: PointCloud):
        """Swap the drawn cloud for ``new``."""
        self._release()
        self.cloud = new
        if new.count == 0:
            return

        pts = to_display_axes(new.positions)
        area = self._marker_area()
        if self.glow:
            self.glow_scatter = self.ax.scatter(
                pts[:, 0], pts[:, 1], pts[:, 2],
                c=new.colors, s=area * self.glow_scale,
                alpha=self.glow_alpha, edgecolors='none', depthshade=False
            )
        self.scatter = self.ax.scatter(
            pts[:, 0], pts[:, 1], pts[:, 2],
            c=new.colors, s=area,
            alpha=self.alpha, edgecolors='none', depthshade=False
        )

        # Fixed cube covering every rotation about y, so the view never rescales
        planar = np.hypot(new.positions[:, 0], new.positions[:, 2]).max()
        vertical = np.abs(new.positions[:, 1]).max()
        extent = max(float(planar), float(vertical), 1e-3)
        self.ax.set_xlim(-extent, extent)
        self.ax.set_ylim(-extent, extent)
        self.ax.set_zlim(-extent, extent)

    def render(self, rotation: float = 0.0):
        """Render current frame."""
        if self.cloud is None:
            return

        pts = to_display_axes(self.cloud.rotated(rotation))
        offsets = (pts[:, 0], pts[:, 1], pts[:, 2])
        for artist in (self.scatter, self.glow_scatter):
            if artist is not None:
                artist._offsets3d = offsets

        self.fig.canvas.draw_idle()

    def set_view(self, elevation: float, azimuth: float):
        """Set camera view angles.

        Args:
            elevation: Elevation angle
            azimuth: Azimuth angle
        """
        self.elevation = elevation
        self.azimuth = azimuth
        if self.ax is not None:
            self.ax.view_init(elev=elevation, azim=azimuth)

    def capture_frame(self) -> np.ndarray:
        """Capture current frame as image array."""
        self.fig.canvas.draw()
        buf = np.asarray(self.fig.canvas.buffer_rgba())
        return np.array(buf[:, :, :3], dtype=np.uint8)

    def clear(self):
        """Clear the renderer."""
        self._release()

    def close(self):
        """Close the renderer."""
        self._release()
        self.fig.clf()
        self.ax = None
