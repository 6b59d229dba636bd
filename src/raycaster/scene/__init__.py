"""Scene module for scene description and ray-scene queries.

Components:
    intersection: Intersection record and the closest-hit linear scan
    manager: Immutable Scene value, SceneManager builder, JSON scene files
    reference: The reference demo scene

A Scene is built once and only read while rendering; the closest-hit query
serves primary, reflected and shadow rays with different t windows.
"""

from .intersection import NO_OBJECT, Intersection, closest_intersection
from .manager import (
    BLACK,
    DEFAULT_BACKGROUND,
    WHITE,
    Scene,
    SceneConfig,
    SceneManager,
    load_scene,
    save_scene,
)
from .reference import ReferenceSceneParams, create_reference_scene

__all__ = [
    # Intersection module
    "Intersection",
    "closest_intersection",
    "NO_OBJECT",
    # Manager module
    "Scene",
    "SceneManager",
    "SceneConfig",
    "load_scene",
    "save_scene",
    "BLACK",
    "WHITE",
    "DEFAULT_BACKGROUND",
    # Reference scene
    "create_reference_scene",
    "ReferenceSceneParams",
]
