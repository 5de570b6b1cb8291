"""Taichi-side ray structure and lens sampling for camera ray generation.

Kernel code cannot use the Python Vec3 type, so this module provides the Ray
dataclass over ``taichi.math.vec3`` together with the GPU unit-disk sampler
used for lens jitter.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from raycam.core.ray import make_ray, random_in_unit_disk, vec3
    >>>
    >>> @ti.kernel
    ... def jittered_origin() -> ti.f32:
    ...     ray = make_ray(random_in_unit_disk(), vec3(0.0, 0.0, -1.0))
    ...     return ray.origin.x
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Upper bound on rejection-sampling rounds inside kernels
MAX_DISK_ATTEMPTS = 64


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray. With a finite aperture this
            is jittered across the lens disk.
        direction: The direction vector. Camera rays are not normalized, so
            origin + direction lands on the focus plane.
    """

    origin: vec3
    direction: vec3


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction inside a kernel."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Squared length of v, avoiding the square root."""
    return tm.dot(v, v)


# =============================================================================
# Lens Sampling
# =============================================================================


@ti.func
def random_in_unit_disk() -> vec3:
    """Generate a random point inside the unit disk in the xy-plane.

    Rejection sampling over [-1, 1)^2, bounded to MAX_DISK_ATTEMPTS rounds.
    The bound is reached with probability (1 - pi/4)^64, in which case the
    disk center is returned.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    p = vec3(0.0, 0.0, 0.0)
    found = False
    for _ in range(MAX_DISK_ATTEMPTS):
        if not found:
            candidate = vec3(
                ti.random(ti.f32) * 2.0 - 1.0,
                ti.random(ti.f32) * 2.0 - 1.0,
                0.0,
            )
            if length_squared(candidate) < 1.0:
                p = candidate
                found = True
    return p


@ti.func
def lens_offset(u: vec3, v: vec3, lens_radius: ti.f32) -> vec3:
    """World-space offset of a random point on the lens disk.

    Args:
        u: Camera right basis vector.
        v: Camera up basis vector.
        lens_radius: Radius of the lens (half the aperture).

    Returns:
        lens_radius * (d.x * u + d.y * v) for a random disk point d.
    """
    rd = lens_radius * random_in_unit_disk()
    return rd.x * u + rd.y * v
