"""Lighting module for light sources and local illumination.

Components:
    light: Ambient, point and directional lights with the Phong diffuse +
        specular model and hard shadows
"""

from .light import SHADOW_T_MIN, Light, LightKind, light_intensity

__all__ = [
    "Light",
    "LightKind",
    "light_intensity",
    "SHADOW_T_MIN",
]
