"""Core math module.

This module contains the building blocks shared by every camera model:

Components:
    vec3: Immutable float32 Vec3 value type and the vector algebra
    sampling: Seeded random sources and unit-disk sampling (CPU)
    ray: Ray dataclass and Taichi-side lens sampling (GPU)

The Python-side modules (vec3, sampling) have no Taichi dependency at call
time and are safe to use from any thread. The ray module exposes ti.func
functions that may only be called from inside Taichi kernels.
"""

from .ray import (
    Ray,
    lens_offset,
    make_ray,
    length_squared,
    random_in_unit_disk,
    vec3,
)
from .sampling import (
    DiskSampler,
    make_rng,
    sample_unit_disk,
    seed_thread_rng,
    thread_rng,
)
from .vec3 import (
    Vec3,
    add,
    as_vec3,
    cross,
    divide_scalar,
    dot,
    is_finite,
    length,
    multiply_scalar,
    multiply_vector,
    near_zero,
    squared_length,
    subtract,
    subtract_scalar,
    unit,
)

__all__ = [
    "Vec3",
    "as_vec3",
    "add",
    "subtract",
    "subtract_scalar",
    "multiply_scalar",
    "multiply_vector",
    "divide_scalar",
    "length",
    "squared_length",
    "dot",
    "cross",
    "unit",
    "near_zero",
    "is_finite",
    "make_rng",
    "thread_rng",
    "seed_thread_rng",
    "sample_unit_disk",
    "DiskSampler",
    "Ray",
    "length_squared",
    "make_ray",
    "vec3",
    "random_in_unit_disk",
    "lens_offset",
]
