"""Render-loop context owning the current camera.

The context replaces a process-wide "current camera": the render loop holds
one RenderContext and passes it to the input handler and the render step.
Each reposition recomputes the whole CameraState from one parameter set and
hands it to registered listeners (for example ``gpu.upload_camera``).

Keyboard bindings:
    W       Move away from the target along z (lookfrom.z doubles)
    S       Move toward the target along z (lookfrom.z halves)
    A, B    Reserved, no camera change
    Escape  Close the window

Example:
    >>> from raycam.config import CameraSettings
    >>> from raycam.interactive.context import RenderContext
    >>>
    >>> context = RenderContext(CameraSettings())
    >>> context.handle_key("w")
    True
    >>> context.lookfrom
    (5.0, 1.0, 10.0)
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from typing import Any

import numpy as np
import taichi as ti

from raycam.camera.thin_lens import CameraRay, CameraState, get_ray, setup_camera
from raycam.config import CameraSettings
from raycam.core.sampling import make_rng

logger = logging.getLogger(__name__)

# Listener receives every newly computed camera state
CameraListener = Callable[[CameraState], None]

# Key names as reported by ti.ui.Window events
KEY_FORWARD = "w"
KEY_BACKWARD = "s"
KEY_RESERVED = ("a", "b")
KEY_CLOSE = "Escape"  # ti.ui.ESCAPE


class RenderContext:
    """Camera state and input handling for one render loop.

    Attributes:
        settings: Private copy of the camera settings.
        lookfrom: Current camera position.
        camera: Current CameraState, recomputed on every change.
        running: False once a close was requested.
        rng: Generator for CPU-side lens sampling.
    """

    def __init__(
        self,
        settings: CameraSettings | None = None,
        *,
        listeners: list[CameraListener] | None = None,
    ) -> None:
        """Create the context and compute the initial camera.

        Args:
            settings: Camera settings. Defaults to CameraSettings().
            listeners: Callables notified with every new CameraState,
                including the initial one.
        """
        # Own a copy so resizing never reaches the caller's settings
        self.settings = dataclasses.replace(settings) if settings is not None else CameraSettings()
        self.lookfrom: tuple[float, float, float] = tuple(self.settings.lookfrom)
        self.running = True
        self.rng: np.random.Generator = make_rng(self.settings.seed)
        self._listeners: list[CameraListener] = list(listeners or [])
        self.camera: CameraState = self.update_camera()

    def add_listener(self, listener: CameraListener) -> None:
        """Register a listener and send it the current camera right away."""
        self._listeners.append(listener)
        listener(self.camera)

    def update_camera(self) -> CameraState:
        """Recompute the camera from the current parameters.

        With focus_on_lookat the focus distance is re-derived from the new
        position, so the look-at point stays in focus.

        Returns:
            The new CameraState, also stored on ``self.camera``.
        """
        params = self.settings.to_camera(lookfrom=self.lookfrom)
        state = setup_camera(params)
        self.camera = state
        logger.debug(
            f"Camera updated: lookfrom={self.lookfrom}, "
            f"focus_dist={params.resolved_focus_dist():.4f}"
        )
        for listener in self._listeners:
            listener(state)
        return state

    def handle_key(self, key: str) -> bool:
        """Apply a key press and recompute the camera.

        Args:
            key: Key name as reported by ti.ui (e.g. "w", "s", "Escape").

        Returns:
            True while the render loop should keep running.
        """
        x, y, z = self.lookfrom
        if key == KEY_CLOSE:
            logger.info("Close requested")
            self.running = False
        elif key == KEY_BACKWARD:
            self.lookfrom = (x, y, z / 2.0)
        elif key == KEY_FORWARD:
            self.lookfrom = (x, y, z * 2.0)
        elif key not in KEY_RESERVED:
            logger.debug(f"Ignoring key {key!r}")
        self.update_camera()
        return self.running

    def handle_window_events(self, window: Any) -> bool:
        """Drain key-press events from a ti.ui.Window.

        Returns:
            True while the render loop should keep running.
        """
        while window.get_event(ti.ui.PRESS):
            self.handle_key(window.event.key)
        return self.running

    def resize(self, width: int, height: int) -> CameraState:
        """Change the viewport size and recompute the camera.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport size {width}x{height} must be positive.")
        self.settings = dataclasses.replace(self.settings, width=width, height=height)
        logger.info(f"Viewport resized to {width}x{height}")
        return self.update_camera()

    def get_ray(self, s: float, t: float) -> CameraRay:
        """Generate a CPU-side camera ray using the context's generator."""
        return get_ray(self.camera, s, t, self.rng)

    def __repr__(self) -> str:
        return (
            f"RenderContext(lookfrom={self.lookfrom}, "
            f"size={self.settings.width}x{self.settings.height}, running={self.running})"
        )
