"""Taichi-resident camera parameters and kernel-side ray generation.

This module is the upload step between the Python camera model and per-pixel
kernels. ``upload_camera`` copies a CameraState verbatim into scalar Taichi
fields; kernels then call ``get_ray`` or ``get_ray_jittered`` to build
defocused primary rays from them.

Taichi must be initialized before this module is imported, since the fields
are allocated at import time.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu, random_seed=7)
    >>> from raycam.camera.thin_lens import ThinLensCamera, setup_camera
    >>> from raycam.camera.gpu import get_ray, upload_camera
    >>>
    >>> state = setup_camera(ThinLensCamera(lookfrom=(5.0, 1.0, 5.0), lookat=(0.0, 0.0, -1.0)))
    >>> upload_camera(state)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0.5, 0.5)  # Ray through image center
"""

import logging

import taichi as ti

from raycam.camera.thin_lens import CameraState
from raycam.core.ray import Ray, lens_offset, make_ray, vec3

logger = logging.getLogger(__name__)

# =============================================================================
# Taichi Fields for Camera State (GPU-accessible)
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())

# Orthonormal basis vectors
_camera_u = ti.Vector.field(3, dtype=ti.f32, shape=())  # Right
_camera_v = ti.Vector.field(3, dtype=ti.f32, shape=())  # Up
_camera_w = ti.Vector.field(3, dtype=ti.f32, shape=())  # Backward (opposite view)

_lens_radius = ti.field(dtype=ti.f32, shape=())

_uploaded = False


# =============================================================================
# Upload (Python-side, called once per camera state)
# =============================================================================


def upload_camera(state: CameraState) -> None:
    """Copy a camera state into the Taichi fields.

    Every field is written from the same state, so kernels never see a mix
    of old and new camera vectors.

    Args:
        state: Camera state from position_camera() or setup_camera().

    Note:
        This function writes to Taichi fields and should be called from
        Python (not from within a Taichi kernel).
    """
    global _uploaded

    _camera_origin[None] = state.origin.to_tuple()
    _lower_left_corner[None] = state.lower_left_corner.to_tuple()
    _viewport_horizontal[None] = state.horizontal.to_tuple()
    _viewport_vertical[None] = state.vertical.to_tuple()
    _camera_u[None] = state.u.to_tuple()
    _camera_v[None] = state.v.to_tuple()
    _camera_w[None] = state.w.to_tuple()
    _lens_radius[None] = float(state.lens_radius)
    _uploaded = True

    logger.debug(f"Uploaded camera: origin={state.origin.to_tuple()}")


def is_uploaded() -> bool:
    """Return True once upload_camera() has been called."""
    return _uploaded


# =============================================================================
# Ray Generation (Taichi-compatible, GPU-callable)
# =============================================================================


@ti.func
def get_ray(s: ti.f32, t: ti.f32) -> Ray:
    """Generate a defocused ray through normalized image coordinates (s, t).

    - s = 0: left edge, s = 1: right edge
    - t = 0: bottom edge, t = 1: top edge

    The origin is jittered across the lens disk and the direction targets
    the matching point on the focus plane. The direction is not normalized.

    Args:
        s: Horizontal coordinate in [0, 1].
        t: Vertical coordinate in [0, 1].

    Returns:
        A Ray starting on the lens disk.
    """
    offset = lens_offset(_camera_u[None], _camera_v[None], _lens_radius[None])
    origin = _camera_origin[None] + offset
    target = (
        _lower_left_corner[None] + s * _viewport_horizontal[None] + t * _viewport_vertical[None]
    )
    return make_ray(origin, target - origin)


@ti.func
def get_ray_jittered(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate a defocused ray with a random sub-pixel offset.

    Args:
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray through a random point inside the pixel.
    """
    s = (ti.cast(pixel_i, ti.f32) + ti.random(ti.f32)) / ti.cast(width, ti.f32)
    t = (ti.cast(pixel_j, ti.f32) + ti.random(ti.f32)) / ti.cast(height, ti.f32)
    return get_ray(s, t)


@ti.func
def get_camera_origin() -> vec3:
    """Get the camera origin (lens center) in world space."""
    return _camera_origin[None]


@ti.func
def get_camera_basis():
    """Get the camera's orthonormal basis vectors as a tuple (u, v, w)."""
    return _camera_u[None], _camera_v[None], _camera_w[None]


# =============================================================================
# Utility Functions
# =============================================================================


def _read(field) -> tuple[float, float, float]:
    value = field[None]
    return (float(value[0]), float(value[1]), float(value[2]))


def get_camera_info() -> dict[str, tuple[float, float, float] | float]:
    """Read the uploaded camera state back from the Taichi fields.

    Returns:
        Dictionary with origin, lower_left, horizontal, vertical, u, v, w
        and lens_radius.

    Raises:
        RuntimeError: If no camera has been uploaded yet.
    """
    if not _uploaded:
        raise RuntimeError("Camera not uploaded. Call upload_camera() first.")

    return {
        "origin": _read(_camera_origin),
        "lower_left": _read(_lower_left_corner),
        "horizontal": _read(_viewport_horizontal),
        "vertical": _read(_viewport_vertical),
        "u": _read(_camera_u),
        "v": _read(_camera_v),
        "w": _read(_camera_w),
        "lens_radius": float(_lens_radius[None]),
    }
