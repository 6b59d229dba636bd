"""Reference demo scene.

Three unit spheres (red, blue, green) resting above a huge yellow sphere
that acts as the ground plane, lit by an ambient, a point and a directional
light. All spheres are partly reflective, so the scene exercises shadows,
highlights and reflection recursion at once.

The camera sits at the origin looking down +z, so the red sphere at
(0, -1, 3) is straight ahead, just below the center of the canvas.

Example:
    >>> from raycaster.camera.pinhole import CanvasCamera
    >>> from raycaster.core.integrator import render_image
    >>> from raycaster.scene.reference import create_reference_scene
    >>>
    >>> image = render_image(create_reference_scene(), CanvasCamera(200, 200))
"""

from dataclasses import dataclass

from raycaster.scene.manager import DEFAULT_BACKGROUND, Scene, SceneManager

# =============================================================================
# Reference Scene Parameters
# =============================================================================


@dataclass
class ReferenceSceneParams:
    """Lighting and background parameters for the reference scene.

    Attributes:
        ambient_intensity: Intensity of the ambient light.
        point_intensity: Intensity of the point light.
        point_position: Position of the point light.
        directional_intensity: Intensity of the directional light.
        directional_direction: Direction toward the directional light.
        background: Color of rays that hit nothing.

    Example:
        >>> params = ReferenceSceneParams(background=(255.0, 255.0, 255.0))
        >>> scene = create_reference_scene(params)
    """

    ambient_intensity: float = 0.2
    point_intensity: float = 0.6
    point_position: tuple[float, float, float] = (2.0, 1.0, 0.0)
    directional_intensity: float = 0.2
    directional_direction: tuple[float, float, float] = (1.0, 4.0, 4.0)
    background: tuple[float, float, float] = DEFAULT_BACKGROUND.to_tuple()


# =============================================================================
# Reference Scene Constants
# =============================================================================

# Sphere colors (RGB in [0, 255])
RED = (255.0, 0.0, 0.0)
BLUE = (0.0, 0.0, 255.0)
GREEN = (0.0, 255.0, 0.0)
YELLOW = (255.0, 255.0, 0.0)

# The ground is a sphere large enough to look flat near the other spheres
GROUND_RADIUS = 5000.0
GROUND_CENTER = (0.0, -5001.0, 0.0)


def create_reference_scene(params: ReferenceSceneParams | None = None) -> Scene:
    """Create the reference scene.

    Sphere order (the closest-hit tie-break order) is red, blue, green,
    ground.

    Args:
        params: Optional lighting/background parameters. If None, uses
            default ReferenceSceneParams().

    Returns:
        The frozen Scene.
    """
    if params is None:
        params = ReferenceSceneParams()

    manager = SceneManager()

    manager.add_sphere((0.0, -1.0, 3.0), 1.0, RED, specular=500, reflectivity=0.2)
    manager.add_sphere((2.0, 0.0, 4.0), 1.0, BLUE, specular=500, reflectivity=0.3)
    manager.add_sphere((-2.0, 0.0, 4.0), 1.0, GREEN, specular=10, reflectivity=0.5)
    manager.add_sphere(GROUND_CENTER, GROUND_RADIUS, YELLOW, specular=1000, reflectivity=0.2)

    manager.add_ambient_light(params.ambient_intensity)
    manager.add_point_light(params.point_intensity, params.point_position)
    manager.add_directional_light(params.directional_intensity, params.directional_direction)

    manager.set_background(params.background)

    return manager.build()
