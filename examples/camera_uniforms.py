#!/usr/bin/env python3
"""Position the camera and print the parameters a renderer would receive.

This script builds a render-loop context with the reference scene settings,
replays a sequence of key presses, and prints the resulting camera
parameters. With --upload it also initializes Taichi, uploads the camera,
and traces a few defocused center rays in a kernel.

Usage:
    python examples/camera_uniforms.py [options]

Options:
    --keys KEYS         Key presses to replay, e.g. "wws" (default: none)
    --aperture A        Lens diameter (default: 0.1)
    --vfov DEG          Vertical field of view in degrees (default: 20)
    --seed SEED         Seed for lens sampling (default: random, logged)
    --upload            Upload to Taichi and trace sample rays
    --verbose           Enable debug logging

Example:
    python examples/camera_uniforms.py --keys ws --aperture 0.5 --upload
"""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger("camera_uniforms")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Print thin-lens camera parameters.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--keys", type=str, default="", help="Key presses to replay")
    parser.add_argument("--aperture", type=float, default=0.1, help="Lens diameter")
    parser.add_argument("--vfov", type=float, default=20.0, help="Vertical FOV in degrees")
    parser.add_argument("--seed", type=int, default=None, help="Lens sampling seed")
    parser.add_argument("--upload", action="store_true", help="Upload to Taichi")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def trace_center_rays(state, count: int, seed: int) -> list[tuple[float, float, float]]:
    """Upload a camera state, trace defocused center rays, return their origins."""
    import taichi as ti

    ti.init(arch=ti.cpu, random_seed=seed)

    # Import after Taichi initialization
    from raycam.camera.gpu import get_ray, upload_camera

    upload_camera(state)
    origins = ti.Vector.field(3, dtype=ti.f32, shape=count)

    @ti.kernel
    def trace():
        for i in range(count):
            origins[i] = get_ray(0.5, 0.5).origin

    trace()
    return [tuple(float(c) for c in row) for row in origins.to_numpy()]


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    from raycam.camera.thin_lens import camera_uniforms
    from raycam.config import CameraSettings
    from raycam.interactive.context import RenderContext

    settings = CameraSettings(aperture=args.aperture, vfov=args.vfov, seed=args.seed)

    try:
        settings.to_camera().validate()
    except ValueError as e:
        logger.error(f"Invalid camera settings: {e}")
        return 1

    context = RenderContext(settings)
    for key in args.keys:
        if not context.handle_key(key):
            break

    for name, value in camera_uniforms(context.camera).items():
        print(f"{name:26s} {value}")

    if args.upload:
        seed = args.seed if args.seed is not None else 0
        for origin in trace_center_rays(context.camera, 8, seed):
            print(f"  ray origin {origin}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
