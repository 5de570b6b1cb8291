"""Camera module for view placement and ray generation.

This module provides the thin-lens camera model:

Components:
    thin_lens: Placement parameters, derived camera state, CPU ray generation
    gpu: Taichi fields holding the camera state and kernel-side get_ray

Camera responsibilities:
    - Build an orthonormal basis from lookfrom, lookat and an up hint
    - Place the viewport on the focus plane from FOV, aspect and focus distance
    - Jitter ray origins across the lens disk for depth of field
    - Export the state as named parameters for a rendering routine

Ray generation uses normalized viewport coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .thin_lens import (
    CameraRay,
    CameraState,
    DegenerateCameraError,
    ThinLensCamera,
    camera_uniforms,
    check_parameters,
    focus_distance,
    get_ray,
    position_camera,
    setup_camera,
)

# Note: gpu is NOT imported here because it allocates Taichi fields at import
# time. Import raycam.camera.gpu directly after ti.init().

__all__ = [
    "ThinLensCamera",
    "CameraState",
    "CameraRay",
    "DegenerateCameraError",
    "position_camera",
    "setup_camera",
    "check_parameters",
    "focus_distance",
    "get_ray",
    "camera_uniforms",
]
