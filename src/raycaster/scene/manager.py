"""Immutable scene value and the scene manager used to build it.

A Scene is an ordered tuple of spheres, a tuple of lights and a background
color. It is built once, before rendering, and is only read afterwards, so
per-pixel evaluations can share it freely.

The SceneManager is the mutable builder side: it accumulates spheres and
lights, validates them as they are added, converts to and from plain
dictionaries (for JSON scene files) and produces the frozen Scene with
build().

Example:
    >>> from raycaster.scene.manager import SceneManager
    >>> manager = SceneManager()
    >>> manager.add_sphere((0, -1, 3), 1.0, (255, 0, 0), specular=500, reflectivity=0.2)
    0
    >>> manager.add_ambient_light(0.2)
    0
    >>> manager.add_point_light(0.6, (2, 1, 0))
    1
    >>> scene = manager.build()
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from raycaster.core.vector import Vec3
from raycaster.geometry.sphere import NO_SPECULAR, Sphere
from raycaster.lighting.light import Light, LightKind
from raycaster.scene.intersection import Intersection, closest_intersection

# Background colors (RGB in [0, 255])
BLACK = Vec3(0.0, 0.0, 0.0)
WHITE = Vec3(255.0, 255.0, 255.0)
DEFAULT_BACKGROUND = BLACK

# Type alias for vectors accepted from user code and config files
VecLike = Vec3 | Sequence[float]


def _as_vec3(value: VecLike) -> Vec3:
    if isinstance(value, Vec3):
        return value
    return Vec3.from_sequence(value)


@dataclass(frozen=True)
class Scene:
    """A read-only scene description.

    Attributes:
        spheres: The spheres, in the order used for closest-hit tie-breaks.
        lights: The light sources.
        background: Color returned for rays that hit nothing.
    """

    spheres: tuple[Sphere, ...] = ()
    lights: tuple[Light, ...] = ()
    background: Vec3 = DEFAULT_BACKGROUND

    def closest_intersection(
        self,
        origin: Vec3,
        direction: Vec3,
        t_min: float,
        t_max: float,
    ) -> Intersection:
        """Closest sphere hit along origin + t * direction with t in (t_min, t_max)."""
        return closest_intersection(self.spheres, origin, direction, t_min, t_max)


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        spheres: List of sphere configurations.
        lights: List of light configurations.
        background: Background color as [r, g, b].
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    background: list[float] = field(default_factory=lambda: list(DEFAULT_BACKGROUND))


class SceneManager:
    """Builder that accumulates spheres and lights into a Scene.

    Attributes:
        spheres: Spheres added so far, in insertion order.
        lights: Lights added so far, in insertion order.
        background: The background color of the scene being built.
    """

    def __init__(self) -> None:
        """Initialize an empty scene with the default background."""
        self.spheres: list[Sphere] = []
        self.lights: list[Light] = []
        self.background: Vec3 = DEFAULT_BACKGROUND

    @classmethod
    def from_scene(cls, scene: Scene) -> "SceneManager":
        """Create a manager pre-populated with an existing scene's contents."""
        manager = cls()
        manager.spheres.extend(scene.spheres)
        manager.lights.extend(scene.lights)
        manager.background = scene.background
        return manager

    def clear(self) -> None:
        """Remove all spheres and lights and restore the default background."""
        self.spheres.clear()
        self.lights.clear()
        self.background = DEFAULT_BACKGROUND

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_sphere(
        self,
        center: VecLike,
        radius: float,
        color: VecLike,
        specular: float | None = None,
        reflectivity: float = 0.0,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere (must be positive).
            color: RGB color, each component in [0, 255].
            specular: Shininess exponent, or None for a surface without
                specular highlights.
            reflectivity: Mirror reflection fraction in [0, 1].

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If the radius, reflectivity or exponent is invalid.
        """
        sphere = Sphere(
            center=_as_vec3(center),
            radius=float(radius),
            color=_as_vec3(color),
            specular=NO_SPECULAR if specular is None else float(specular),
            reflectivity=float(reflectivity),
        )
        self.spheres.append(sphere)
        return len(self.spheres) - 1

    # =========================================================================
    # Light Management
    # =========================================================================

    def add_light(self, light: Light) -> int:
        """Add an already constructed light and return its index."""
        self.lights.append(light)
        return len(self.lights) - 1

    def add_ambient_light(self, intensity: float) -> int:
        return self.add_light(Light.ambient(float(intensity)))

    def add_point_light(self, intensity: float, position: VecLike) -> int:
        return self.add_light(Light.point(float(intensity), _as_vec3(position)))

    def add_directional_light(self, intensity: float, direction: VecLike) -> int:
        return self.add_light(Light.directional(float(intensity), _as_vec3(direction)))

    def set_background(self, color: VecLike) -> None:
        self.background = _as_vec3(color)

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_sphere_count(self) -> int:
        return len(self.spheres)

    def get_light_count(self) -> int:
        return len(self.lights)

    def build(self) -> Scene:
        """Freeze the current contents into a Scene.

        Later changes to the manager do not affect scenes already built.
        """
        return Scene(
            spheres=tuple(self.spheres),
            lights=tuple(self.lights),
            background=self.background,
        )

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object.

        Returns:
            A SceneConfig containing all spheres and lights.
        """
        config = SceneConfig(background=list(self.background))

        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "color": list(sphere.color),
                    "specular": sphere.specular if sphere.has_specular else None,
                    "reflectivity": sphere.reflectivity,
                }
            )

        for light in self.lights:
            light_config: dict[str, Any] = {
                "type": light.kind.name.lower(),
                "intensity": light.intensity,
            }
            if light.kind == LightKind.POINT:
                light_config["position"] = list(light.vector)
            elif light.kind == LightKind.DIRECTIONAL:
                light_config["direction"] = list(light.vector)
            config.lights.append(light_config)

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration.

        Args:
            config: The scene configuration to load.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()
        self.set_background(config.background)

        for sphere_config in config.spheres:
            self.add_sphere(
                center=sphere_config.get("center", [0.0, 0.0, 0.0]),
                radius=sphere_config.get("radius", 1.0),
                color=sphere_config.get("color", [255.0, 255.0, 255.0]),
                specular=sphere_config.get("specular"),
                reflectivity=sphere_config.get("reflectivity", 0.0),
            )

        for light_config in config.lights:
            light_type = str(light_config.get("type", "")).lower()
            intensity = light_config.get("intensity", 0.0)
            if light_type == "ambient":
                self.add_ambient_light(intensity)
            elif light_type == "point":
                if "position" not in light_config:
                    raise ValueError("Point light config requires 'position'")
                self.add_point_light(intensity, light_config["position"])
            elif light_type == "directional":
                if "direction" not in light_config:
                    raise ValueError("Directional light config requires 'direction'")
                self.add_directional_light(intensity, light_config["direction"])
            else:
                raise ValueError(f"Unknown light type: {light_type}")

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "background": config.background,
            "spheres": config.spheres,
            "lights": config.lights,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'spheres', 'lights' and optional
                'background' keys.
        """
        config = SceneConfig(
            spheres=data.get("spheres", []),
            lights=data.get("lights", []),
            background=data.get("background", list(DEFAULT_BACKGROUND)),
        )
        self.from_config(config)


def load_scene(path: str | Path) -> Scene:
    """Load a scene from a JSON file.

    Raises:
        ValueError: If the file describes an invalid scene.
    """
    with open(path) as f:
        data = json.load(f)
    manager = SceneManager()
    manager.from_dict(data)
    return manager.build()


def save_scene(scene: Scene, path: str | Path) -> None:
    """Write a scene to a JSON file readable by load_scene()."""
    with open(path, "w") as f:
        json.dump(SceneManager.from_scene(scene).to_dict(), f, indent=2)
