"""Base renderer interface."""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np

from galaxy_gen.generator import PointCloud


class Renderer(ABC):
    """Abstract base class for renderers."""
    
    @abstractmethod
    def set_cloud(self, old: Optional[PointCloud], new: PointCloud):
        """Release everything built from ``old`` and install ``new``.
        
        Matches the scene listener signature so a renderer can be passed
        straight to ``GalaxyScene.add_listener``.
        
        Args:
            old: Previously installed cloud (None on first install)
            new: Cloud to draw from now on
        """
        pass
    
    @abstractmethod
    def render(self, rotation: float = 0.0):
        """Render current frame.
        
        Args:
            rotation: Rotation of the cloud about the vertical axis (radians)
        """
        pass
    
    @abstractmethod
    def capture_frame(self) -> np.ndarray:
        """Capture current frame as image array.
        
        Returns:
            Image array (H, W, 3) uint8
        """
        pass
    
    @abstractmethod
    def clear(self):
        """Clear the renderer."""
        pass
    
    @abstractmethod
    def close(self):
        """Close the renderer."""
        pass
