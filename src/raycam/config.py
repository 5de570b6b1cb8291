"""Default camera settings.

These defaults reproduce the reference scene: a 600x300 view from (5, 1, 5)
toward (0, 0, -1) with a 20 degree vertical FOV and a small aperture that
focuses on the look-at point.
"""

from dataclasses import dataclass

from raycam.camera.thin_lens import ThinLensCamera


@dataclass
class CameraSettings:
    """Settings for a render-loop camera.

    Attributes:
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        lookfrom: Initial camera position.
        lookat: Point the camera looks at.
        vup: Up direction hint.
        vfov: Vertical field of view in degrees.
        aperture: Lens diameter.
        focus_on_lookat: When True the focus distance always equals the
            distance from lookfrom to lookat, recomputed on every move.
        focus_dist: Fixed focus distance, used when focus_on_lookat is False.
        seed: Seed for the lens-sampling generator. None draws and logs one.

    Example:
        >>> settings = CameraSettings()
        >>> settings.aspect_ratio
        2.0
    """

    width: int = 600
    height: int = 300
    lookfrom: tuple[float, float, float] = (5.0, 1.0, 5.0)
    lookat: tuple[float, float, float] = (0.0, 0.0, -1.0)
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 20.0
    aperture: float = 0.1
    focus_on_lookat: bool = True
    focus_dist: float | None = None
    seed: int | None = None

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    def to_camera(self, lookfrom: tuple[float, float, float] | None = None) -> ThinLensCamera:
        """Build camera parameters, optionally overriding the position.

        Raises:
            ValueError: If focus_on_lookat is False and no focus_dist is set.
        """
        if not self.focus_on_lookat and self.focus_dist is None:
            raise ValueError("focus_dist must be set when focus_on_lookat is False.")
        return ThinLensCamera(
            lookfrom=self.lookfrom if lookfrom is None else lookfrom,
            lookat=self.lookat,
            vup=self.vup,
            vfov=self.vfov,
            aspect_ratio=self.aspect_ratio,
            aperture=self.aperture,
            focus_dist=None if self.focus_on_lookat else self.focus_dist,
        )
