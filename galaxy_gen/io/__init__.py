"""Export of rendered frames."""

from galaxy_gen.io.gif_exporter import GIFExporter

__all__ = ["GIFExporter"]
