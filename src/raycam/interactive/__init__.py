"""Interactive module for render-loop camera control.

Components:
    context: RenderContext owning the current camera, key handling and
        listeners notified on every reposition
"""

from .context import RenderContext

__all__ = ["RenderContext"]
