"""Basic example of using the galaxy generator."""

import numpy as np
from galaxy_gen import GalaxyParameters, generate

def main():
    """Generate a spiral galaxy and print a few statistics."""
    params = GalaxyParameters(count=10000, branches=4, spin=-1.5)
    
    # Seeded random source for a reproducible cloud
    rng = np.random.default_rng(42)
    cloud = generate(params, rng)
    
    print(f"Generated {cloud.count} points")
    print(f"Max radius: {cloud.radii.max():.3f}")
    print(f"Vertical spread: {cloud.positions[:, 1].std():.3f}")
    print(f"Mean color: {cloud.colors.mean(axis=0)}")

if __name__ == "__main__":
    main()
