"""Whitted-style sphere ray caster.

Renders scenes of spheres lit by ambient, point and directional lights, with
Phong diffuse + specular shading, hard shadows and recursive mirror
reflections. A pure-Python reference caster evaluates single pixels; a
Taichi kernel renders whole frames in parallel with the same model.

Subpackages:
    core: Vector math, quadratic solver, ray caster and parallel renderer
    geometry: Sphere primitive and intersection
    lighting: Light sources and the local illumination model
    scene: Scene value, closest-hit query, scene files and the demo scene
    camera: Canvas pixel to ray mapping
    preview: Framebuffer conversion, PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
