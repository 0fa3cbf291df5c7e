"""Example rendering a rotating galaxy to PNG frames."""

import numpy as np
from galaxy_gen import GalaxyParameters, GalaxyScene
from galaxy_gen.render.points import PointsRenderer

def main():
    """Render a few frames while the galaxy spins up."""
    scene = GalaxyScene(GalaxyParameters(count=20000, spin=0.5), rng=np.random.default_rng(123))
    
    renderer = PointsRenderer(figsize=(6, 6), dpi=100)
    renderer.set_cloud(None, scene.current)
    scene.add_listener(renderer.set_cloud)
    
    print("Rendering frames...")
    try:
        for frame in range(5):
            rotation = scene.tick(frame * 0.5)
            scene.set_and_regenerate("spin", 0.5 + frame * 0.5)
            renderer.render(rotation)
            renderer.fig.savefig(f"galaxy_{frame}.png", facecolor='black')
    finally:
        renderer.close()
        print("Done!")

if __name__ == "__main__":
    main()
