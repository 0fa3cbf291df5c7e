"""Configuration management."""

import json
from typing import Dict, Any, Optional, Tuple
from pathlib import Path
from dataclasses import dataclass, asdict, field

from galaxy_gen.params import GalaxyParameters


@dataclass
class Config:
    """Viewer and export configuration."""
    # Galaxy parameters (GalaxyParameters fields)
    galaxy: Dict[str, Any] = field(default_factory=dict)

    # Viewer parameters
    figsize: Tuple[float, float] = (10.0, 8.0)
    dpi: int = 100
    elevation: float = 45.0
    azimuth: float = -90.0
    fps: int = 60
    auto_spin: bool = False

    # Export parameters
    output_path: str = "galaxy"
    frames: int = 120

    # Reproducibility
    seed: Optional[int] = None

    def __post_init__(self):
        self.figsize = tuple(self.figsize)

    def galaxy_parameters(self) -> GalaxyParameters:
        """Build galaxy parameters from the ``galaxy`` section."""
        return GalaxyParameters.from_dict(self.galaxy)


def load_config(config_path: str) -> Config:
    """Load configuration from file.
    
    Args:
        config_path: Path to config file (.json or .yaml)
        
    Returns:
        Config object
    """
    config_path = Path(config_path)
    
    with open(config_path, 'r') as f:
        if config_path.suffix == '.yaml' or config_path.suffix == '.yml':
            try:
                import yaml
            except ImportError:
                raise ImportError("YAML support requires PyYAML. Install with: pip install pyyaml")
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    
    return Config(**(data or {}))


def save_config(config: Config, output_path: str):
    """Save configuration to file.
    
    Args:
        config: Config object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)
    data['figsize'] = list(data['figsize'])
    
    with open(output_path, 'w') as f:
        if output_path.suffix == '.yaml' or output_path.suffix == '.yml':
            try:
                import yaml
            except ImportError:
                raise ImportError("YAML support requires PyYAML. Install with: pip install pyyaml")
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
