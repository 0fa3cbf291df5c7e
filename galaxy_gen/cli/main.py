"""CLI main entry point."""

import argparse
import sys
from dataclasses import fields
from galaxy_gen.params import GalaxyParameters, PARAMETER_RANGES
from galaxy_gen.scene import GalaxyScene
from galaxy_gen.render.points import PointsRenderer
from galaxy_gen.io.gif_exporter import GIFExporter
from galaxy_gen.utils.config import Config, load_config
from galaxy_gen.utils.reproducibility import create_random_source


def build_config(args) -> Config:
    """Merge the config file (if any) with command-line overrides."""
    config = load_config(args.config) if args.config else Config()

    galaxy = dict(config.galaxy)
    for f in fields(GalaxyParameters):
        value = getattr(args, f.name, None)
        if value is not None:
            galaxy[f.name] = value
    config.galaxy = galaxy

    if args.seed is not None:
        config.seed = args.seed
    if args.output is not None:
        config.output_path = args.output
    if args.frames is not None:
        config.frames = args.frames
    if args.fps is not None:
        config.fps = args.fps
    if args.elevation is not None:
        config.elevation = args.elevation
    if args.azimuth is not None:
        config.azimuth = args.azimuth
    if args.auto_spin:
        config.auto_spin = True
    return config


def create_scene(config: Config) -> GalaxyScene:
    """Create the scene (clamped to the panel ranges) with a seeded random source."""
    return GalaxyScene(config.galaxy_parameters(), rng=create_random_source(config.seed))


def render_image(config: Config):
    """Render a single still image."""
    scene = create_scene(config)
    renderer = PointsRenderer(figsize=config.figsize, dpi=config.dpi,
                              elevation=config.elevation, azimuth=config.azimuth)
    renderer.set_cloud(None, scene.current)
    renderer.render(scene.rotation)

    output_path = config.output_path + ".png"
    print(f"Rendering {scene.current.count} points to {output_path}...")
    renderer.fig.savefig(output_path, facecolor=renderer.fig.get_facecolor())
    renderer.close()
    print("Done!")


def export_gif(config: Config):
    """Render the rotating galaxy to an animated GIF."""
    scene = create_scene(config)
    renderer = PointsRenderer(figsize=config.figsize, dpi=config.dpi,
                              elevation=config.elevation, azimuth=config.azimuth)
    renderer.set_cloud(None, scene.current)
    scene.add_listener(renderer.set_cloud)
    exporter = GIFExporter(config.output_path + ".gif", fps=config.fps)

    print(f"Rendering {config.frames} frames of {scene.current.count} points")
    for frame in range(config.frames):
        elapsed = frame / config.fps
        rotation = scene.tick(elapsed)
        if config.auto_spin:
            scene.advance_spin()
        renderer.render(rotation)
        exporter.add_frame(renderer.capture_frame())

    print(f"Exporting GIF to {exporter.output_path}...")
    exporter.export()
    renderer.close()
    print("Done!")


def run_viewer(config: Config):
    """Open the interactive viewer."""
    from galaxy_gen.ui.main import run_gui
    run_gui(config)


def add_parameter_arguments(parser: argparse.ArgumentParser):
    """Add one option per galaxy parameter, e.g. ``--randomness-power``."""
    defaults = GalaxyParameters()
    group = parser.add_argument_group("galaxy parameters")
    for f in fields(GalaxyParameters):
        flag = "--" + f.name.replace("_", "-")
        default = getattr(defaults, f.name)
        if f.name in PARAMETER_RANGES:
            lo, hi, step = PARAMETER_RANGES[f.name]
            group.add_argument(flag, type=type(default), default=None,
                               help=f"{f.name} in [{lo}, {hi}], step {step} (default: {default})")
        else:
            group.add_argument(flag, type=str, default=None,
                               help=f"{f.name} as hex or color name (default: {default})")


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Galaxy Generator - procedural spiral galaxy point cloud")

    parser.add_argument('--mode', type=str, default='view',
                       choices=['view', 'image', 'gif'],
                       help='Open the viewer, render a still image, or export a rotating GIF')
    parser.add_argument('--config', type=str, default=None,
                       help='Config file (.json or .yaml)')
    add_parameter_arguments(parser)

    # Viewer
    parser.add_argument('--elevation', type=float, default=None,
                       help='Camera elevation angle (default: 45)')
    parser.add_argument('--azimuth', type=float, default=None,
                       help='Camera azimuth angle (default: -90)')
    parser.add_argument('--auto-spin', action='store_true',
                       help='Increase spin every frame until it reaches 5')

    # Export
    parser.add_argument('--output', type=str, default=None,
                       help='Output file base name')
    parser.add_argument('--frames', type=int, default=None,
                       help='Number of GIF frames')
    parser.add_argument('--fps', type=int, default=None,
                       help='Frames per second')

    # Reproducibility
    parser.add_argument('--seed', type=int, default=None,
                       help='Random seed for reproducibility')

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
        config.galaxy_parameters().validate()
    except (OSError, KeyError, TypeError, ValueError) as e:
        print(f"Invalid configuration: {e}")
        sys.exit(1)

    if args.mode == 'image':
        render_image(config)
    elif args.mode == 'gif':
        export_gif(config)
    else:
        run_viewer(config)


if __name__ == '__main__':
    main()
