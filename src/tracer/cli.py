"""Command-line entry point: render a JSON scene to an image file.

Usage:
    python -m src.tracer.cli [options]

Options:
    -s, --scene PATH    Scene file (default: scene.json)
    -o, --output PATH   Output image (default: output.png)
    -p, --pass N        Maximum reflection depth, 0-255 (default: 3)
    --arch ARCH         Taichi backend (default: cpu)
    -v, --verbose       Enable debug logging

Example:
    python -m src.tracer.cli -s examples/scene.json -o render.png -p 5
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import taichi as ti

logger = logging.getLogger(__name__)

DEFAULT_SCENE_PATH = "scene.json"
DEFAULT_OUTPUT_PATH = "output.png"
DEFAULT_PASSES = 3
MAX_PASSES = 255

ARCHITECTURES = ("cpu", "gpu", "cuda", "vulkan", "metal")


@dataclass(frozen=True)
class RenderConfig:
    """Settings for one render.

    Attributes:
        scene_path: JSON scene file to read.
        output_path: Image file to write. The extension selects the format.
        passes: Maximum reflection depth.
        arch: Taichi backend name.
    """

    scene_path: str = DEFAULT_SCENE_PATH
    output_path: str = DEFAULT_OUTPUT_PATH
    passes: int = DEFAULT_PASSES
    arch: str = "cpu"


def _pass_count(value: str) -> int:
    try:
        passes = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid pass count: {value!r}") from None
    if not 0 <= passes <= MAX_PASSES:
        raise argparse.ArgumentTypeError(f"pass count must be in [0, {MAX_PASSES}], got {passes}")
    return passes


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="tracer",
        description="Render a JSON scene with a Whitted-style ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-s",
        "--scene",
        default=DEFAULT_SCENE_PATH,
        help=f"Scene file (default: {DEFAULT_SCENE_PATH})",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT_PATH,
        help=f"Output image (default: {DEFAULT_OUTPUT_PATH})",
    )
    parser.add_argument(
        "-p",
        "--pass",
        dest="passes",
        type=_pass_count,
        default=DEFAULT_PASSES,
        help=f"Maximum reflection depth, 0-{MAX_PASSES} (default: {DEFAULT_PASSES})",
    )
    parser.add_argument(
        "--arch",
        choices=ARCHITECTURES,
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> tuple[RenderConfig, bool]:
    """Parse command-line arguments.

    Returns:
        The render configuration and the verbose flag.
    """
    args = build_parser().parse_args(argv)
    config = RenderConfig(
        scene_path=args.scene,
        output_path=args.output,
        passes=args.passes,
        arch=args.arch,
    )
    return config, args.verbose


def run(config: RenderConfig) -> Path:
    """Load the configured scene, render it and write the image.

    Taichi must already be initialized.

    Returns:
        The path that was written.

    Raises:
        SceneLoadError: If the scene file cannot be read or parsed.
        ImageEncodingError: If the image cannot be written.
    """
    # Lazy imports so Taichi fields are created after ti.init()
    from src.tracer.core.renderer import render
    from src.tracer.scene.loader import load_scene

    print(f"Using scene: {config.scene_path}")
    print(f"Writing to {config.output_path}")
    print(f"Number of passes: {config.passes}")

    scene = load_scene(config.scene_path)
    return render(config.passes, scene, config.output_path)


def _init_taichi(arch: str) -> None:
    # Exact IEEE arithmetic keeps shading decisions and truncation reproducible
    ti.init(arch=getattr(ti, arch), default_fp=ti.f64, fast_math=False)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    config, verbose = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    _init_taichi(config.arch)

    from src.tracer.output.export import ImageEncodingError
    from src.tracer.scene.loader import SceneLoadError

    try:
        run(config)
        return 0
    except (SceneLoadError, ImageEncodingError, OSError, ValueError) as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
