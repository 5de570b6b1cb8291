"""Thin-lens camera model with depth of field.

This module turns intuitive placement parameters into the camera state used
to generate view rays:

- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view and aspect ratio
- Aperture and focus distance for defocus blur

The camera builds an orthonormal basis (u, v, w) from the view parameters:

- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Unlike a pinhole camera with its viewport at unit distance, the viewport here
sits ``focus_dist`` in front of the origin. Rays leave from a random point on
a lens disk of radius ``aperture / 2`` and pass through the viewport, so only
geometry on the focus plane stays sharp.

Example:
    >>> from raycam.camera.thin_lens import position_camera
    >>> state = position_camera(
    ...     lookfrom=(0.0, 0.0, 0.0),
    ...     lookat=(0.0, 0.0, -1.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=90.0,
    ...     aspect_ratio=1.0,
    ...     aperture=0.0,
    ...     focus_dist=1.0,
    ... )
    >>> state.lower_left_corner
    Vec3(x=-1.0, y=-1.0, z=-1.0)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from raycam.core.sampling import sample_unit_disk
from raycam.core.vec3 import (
    Vec3,
    add,
    as_vec3,
    cross,
    is_finite,
    length,
    multiply_scalar,
    near_zero,
    subtract,
    unit,
)

logger = logging.getLogger(__name__)

VectorLike = Vec3 | Iterable[float]


class DegenerateCameraError(ValueError):
    """Raised when the view basis cannot be built from the given placement.

    This happens when lookfrom equals lookat, or when the up hint is
    parallel to the view direction.
    """


# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class ThinLensCamera:
    """Placement parameters for a thin-lens camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction hint for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees, in (0, 180).
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 gives a pinhole camera with no blur.
        focus_dist: Distance from lookfrom to the plane of sharpest focus.
            None focuses on the look-at point.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 90.0
    aspect_ratio: float = 1.0
    aperture: float = 0.0
    focus_dist: float | None = None

    def resolved_focus_dist(self) -> float:
        """Return focus_dist, or the distance to lookat when it is None."""
        if self.focus_dist is None:
            return focus_distance(self.lookfrom, self.lookat)
        return self.focus_dist

    def validate(self) -> None:
        """Check the scalar parameters.

        Raises:
            ValueError: If a parameter is outside its valid range.
        """
        check_parameters(self.vfov, self.aspect_ratio, self.aperture, self.focus_dist)


@dataclass(frozen=True)
class CameraState:
    """Derived camera state consumed by ray generation.

    All fields are computed together from one parameter set by
    position_camera(); the record is never updated piecemeal.

    Attributes:
        origin: Eye point in world space.
        lower_left_corner: Lower-left corner of the viewport on the focus plane.
        horizontal: Full-width span of the viewport.
        vertical: Full-height span of the viewport.
        u: Camera right basis vector.
        v: Camera up basis vector.
        w: Camera backward basis vector (opposite view direction).
        lens_radius: Half the aperture; 0 for a pinhole camera.
    """

    origin: Vec3
    lower_left_corner: Vec3
    horizontal: Vec3
    vertical: Vec3
    u: Vec3
    v: Vec3
    w: Vec3
    lens_radius: np.float32

    def viewport_point(self, s: float, t: float) -> Vec3:
        """Point on the viewport at normalized coordinates (s, t) in [0, 1]^2."""
        return add(
            add(self.lower_left_corner, multiply_scalar(self.horizontal, s)),
            multiply_scalar(self.vertical, t),
        )


@dataclass(frozen=True)
class CameraRay:
    """A CPU-side camera ray.

    Attributes:
        origin: Ray origin, jittered across the lens disk.
        direction: Unnormalized direction; origin + direction lies on the
            focus plane.
    """

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        """Return origin + t * direction."""
        return add(self.origin, multiply_scalar(self.direction, t))


# =============================================================================
# Camera Positioning
# =============================================================================


def check_parameters(
    vfov: float, aspect_ratio: float, aperture: float, focus_dist: float | None
) -> None:
    """Check the scalar placement parameters.

    A focus_dist of None (focus on lookat) is accepted.

    Raises:
        ValueError: If a parameter is outside its valid range.
    """
    if not 0.0 < vfov < 180.0:
        raise ValueError(f"Vertical FOV = {vfov} is outside (0, 180) degrees.")
    if aspect_ratio <= 0.0:
        raise ValueError(f"Aspect ratio = {aspect_ratio} must be positive.")
    if aperture < 0.0:
        raise ValueError(f"Aperture = {aperture} is negative.")
    if focus_dist is not None and focus_dist <= 0.0:
        raise ValueError(f"Focus distance = {focus_dist} must be positive.")


def focus_distance(lookfrom: VectorLike, lookat: VectorLike) -> float:
    """Distance between lookfrom and lookat, used to focus on the target."""
    return float(length(subtract(as_vec3(lookfrom), as_vec3(lookat))))


def position_camera(
    lookfrom: VectorLike,
    lookat: VectorLike,
    vup: VectorLike,
    vfov: float,
    aspect_ratio: float,
    aperture: float,
    focus_dist: float,
    *,
    validate: bool = False,
) -> CameraState:
    """Compute camera state from placement parameters.

    The viewport is placed focus_dist in front of the origin, with half
    extents tan(vfov / 2) * focus_dist vertically and aspect_ratio times
    that horizontally.

    Args:
        lookfrom: Camera position.
        lookat: Target point; must differ from lookfrom.
        vup: Up hint; must not be parallel to lookfrom - lookat.
        vfov: Vertical field of view in degrees.
        aspect_ratio: Viewport width / height.
        aperture: Lens diameter.
        focus_dist: Distance to the focus plane.
        validate: Reject out-of-range scalars with ValueError and a
            degenerate basis with DegenerateCameraError instead of
            returning negative lens radii or NaN components.

    Returns:
        A new CameraState.

    Raises:
        ValueError: If validate is True and a scalar parameter is invalid.
        DegenerateCameraError: If validate is True and the basis is degenerate.
    """
    lookfrom = as_vec3(lookfrom)
    lookat = as_vec3(lookat)
    vup = as_vec3(vup)
    if validate:
        check_parameters(vfov, aspect_ratio, aperture, focus_dist)

    lens_radius = np.float32(aperture / 2.0)

    # Viewport half extents at unit distance
    theta = math.radians(vfov)
    half_height = np.float32(math.tan(theta / 2.0))
    half_width = np.float32(aspect_ratio) * half_height
    fd = np.float32(focus_dist)

    origin = lookfrom
    back = subtract(lookfrom, lookat)
    if validate and near_zero(back):
        raise DegenerateCameraError(f"lookfrom {lookfrom} and lookat {lookat} coincide.")
    w = unit(back)

    right = cross(vup, w)
    if validate and near_zero(right):
        raise DegenerateCameraError(f"Up hint {vup} is parallel to the view direction.")
    u = unit(right)
    v = cross(w, u)

    lower_left_corner = subtract(
        subtract(
            subtract(origin, multiply_scalar(u, half_width * fd)),
            multiply_scalar(v, half_height * fd),
        ),
        multiply_scalar(w, fd),
    )
    horizontal = multiply_scalar(u, 2.0 * half_width * fd)
    vertical = multiply_scalar(v, 2.0 * half_height * fd)

    if not (is_finite(u) and is_finite(v) and is_finite(w)):
        logger.warning(
            f"Degenerate camera basis for lookfrom={lookfrom}, lookat={lookat}, vup={vup}"
        )
    logger.debug(
        f"Camera positioned: origin={origin}, vfov={vfov}, aspect={aspect_ratio:.4f}, "
        f"lens_radius={float(lens_radius):.4f}, focus_dist={float(fd):.4f}"
    )

    return CameraState(
        origin=origin,
        lower_left_corner=lower_left_corner,
        horizontal=horizontal,
        vertical=vertical,
        u=u,
        v=v,
        w=w,
        lens_radius=lens_radius,
    )


def setup_camera(camera: ThinLensCamera, *, validate: bool = False) -> CameraState:
    """Compute camera state from a ThinLensCamera configuration.

    Args:
        camera: Placement parameters. focus_dist=None focuses on lookat.
        validate: Also check the scalar parameters and reject a degenerate
            basis.

    Returns:
        A new CameraState.

    Raises:
        ValueError: If validate is True and a parameter is invalid.
    """
    if validate:
        camera.validate()
    return position_camera(
        camera.lookfrom,
        camera.lookat,
        camera.vup,
        camera.vfov,
        camera.aspect_ratio,
        camera.aperture,
        camera.resolved_focus_dist(),
        validate=validate,
    )


# =============================================================================
# Ray Generation (CPU)
# =============================================================================


def get_ray(
    state: CameraState,
    s: float,
    t: float,
    rng: np.random.Generator | None = None,
) -> CameraRay:
    """Generate a defocused ray through viewport coordinates (s, t).

    The origin is jittered by lens_radius * (d.x * u + d.y * v) for a random
    unit-disk point d; the direction targets the viewport point from the
    jittered origin. A pinhole camera (lens_radius 0) draws no random numbers.

    Args:
        state: Camera state from position_camera().
        s: Horizontal coordinate in [0, 1] (left to right).
        t: Vertical coordinate in [0, 1] (bottom to top).
        rng: Generator for lens sampling. Defaults to the thread's generator.

    Returns:
        A CameraRay.
    """
    origin = state.origin
    if state.lens_radius > 0.0:
        rd = multiply_scalar(sample_unit_disk(rng), state.lens_radius)
        offset = add(multiply_scalar(state.u, rd.x), multiply_scalar(state.v, rd.y))
        origin = add(origin, offset)
    direction = subtract(state.viewport_point(s, t), origin)
    return CameraRay(origin=origin, direction=direction)


# =============================================================================
# Parameter Export
# =============================================================================


def camera_uniforms(state: CameraState) -> dict[str, tuple[float, float, float] | float]:
    """Return the camera state as named parameters for a rendering routine.

    Names follow the shader convention camera_origin, camera_lower_left_corner,
    camera_horizontal, camera_vertical, camera_lens_radius, plus camera_u and
    camera_v for consumers that compute lens jitter themselves.
    """
    return {
        "camera_origin": state.origin.to_tuple(),
        "camera_lower_left_corner": state.lower_left_corner.to_tuple(),
        "camera_horizontal": state.horizontal.to_tuple(),
        "camera_vertical": state.vertical.to_tuple(),
        "camera_lens_radius": float(state.lens_radius),
        "camera_u": state.u.to_tuple(),
        "camera_v": state.v.to_tuple(),
    }
