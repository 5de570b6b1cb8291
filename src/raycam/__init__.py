"""Thin-lens camera core for ray generation.

This package positions a virtual camera and derives the parameters needed to
cast view rays through a viewport, with depth of field via a thin-lens
approximation:
- Immutable float32 vector algebra
- Orthonormal view basis and viewport on the focus plane
- Unit-disk lens sampling for defocus blur
- Upload of the camera state to Taichi kernels

Subpackages:
    core: Vector algebra, random sources, Taichi ray helpers
    camera: Thin-lens camera model, CPU and GPU ray generation
    interactive: Render-loop context and input handling
"""

__version__ = "0.1.0"
