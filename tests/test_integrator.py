"""Unit tests for the recursive ray caster.

Tests cover:
- Background color for rays that miss, without shading work
- Local shading of a single sphere seen from the canvas center
- Reflection recursion: blending, depth limit, non-reflective surfaces
- The view vector passed to the lighting model
- Whole-image rendering with progress callbacks
"""

import math

import pytest


class TestCastMiss:
    """Tests for rays that hit nothing."""

    def test_empty_scene_returns_background(self):
        from raycaster.core.integrator import cast
        from raycaster.core.vector import Vec3
        from raycaster.scene.manager import WHITE, Scene

        scene = Scene(background=WHITE)
        assert cast(scene, Vec3(0.0, 0.0, 0.0), Vec3(0.3, -0.2, 1.0), depth=3) == WHITE

    def test_miss_skips_light_evaluation(self, monkeypatch, red_sphere_scene):
        from raycaster.core import integrator
        from raycaster.core.vector import Vec3

        def fail(*args, **kwargs):
            raise AssertionError("lights evaluated for a missed ray")

        monkeypatch.setattr(integrator, "local_intensity", fail)
        monkeypatch.setattr(integrator, "light_intensity", fail)

        color = integrator.cast(red_sphere_scene, Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
        assert color == red_sphere_scene.background

    def test_negative_depth_raises(self, red_sphere_scene):
        from raycaster.core.integrator import cast
        from raycaster.core.vector import Vec3

        with pytest.raises(ValueError, match="depth"):
            cast(red_sphere_scene, Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0), depth=-1)


class TestCastLocalShading:
    """Tests for shading without reflection."""

    def test_canvas_center_sees_red_sphere(self, red_sphere_scene):
        """The center ray grazes the top of the red sphere at (0, 0, 3).

        There the normal is +y; the point light adds 0.6 / sqrt(14) on top of
        the 0.2 ambient.
        """
        from raycaster.camera.pinhole import CanvasCamera
        from raycaster.core.integrator import render_pixel

        color = render_pixel(red_sphere_scene, CanvasCamera(100, 100), 50, 50)

        intensity = 0.2 + 0.6 / math.sqrt(14.0)
        assert 0.2 < intensity < 0.8
        assert math.isclose(color.x, 255.0 * intensity)
        assert color.y == 0.0
        assert color.z == 0.0

    def test_colors_are_not_clamped(self):
        from raycaster.core.integrator import cast
        from raycaster.core.vector import Vec3
        from raycaster.scene.manager import SceneManager

        manager = SceneManager()
        manager.add_sphere((0.0, 0.0, 3.0), 1.0, (200.0, 100.0, 0.0))
        manager.add_ambient_light(2.0)
        color = cast(manager.build(), Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0))

        assert color == Vec3(400.0, 200.0, 0.0)


class TestCastReflection:
    """Tests for the reflection recursion.

    The mirror scene is a single sphere at (0, 0, 3) lit only by an ambient
    light of intensity 1. The camera ray along +z hits it head-on at (0, 0, 2)
    and reflects straight back toward the origin, where it hits nothing.
    """

    def _mirror_scene(self, reflectivity):
        from raycaster.scene.manager import WHITE, SceneManager

        manager = SceneManager()
        manager.add_sphere((0.0, 0.0, 3.0), 1.0, (255.0, 0.0, 0.0), reflectivity=reflectivity)
        manager.add_ambient_light(1.0)
        manager.set_background(WHITE)
        return manager.build()

    def _count_casts(self, monkeypatch):
        from raycaster.core import integrator

        calls = []
        original = integrator.cast

        def counting_cast(*args, **kwargs):
            calls.append(args)
            return original(*args, **kwargs)

        monkeypatch.setattr(integrator, "cast", counting_cast)
        return calls

    def test_blend_with_background(self):
        from raycaster.core.integrator import cast
        from raycaster.core.vector import Vec3

        scene = self._mirror_scene(0.5)
        color = cast(scene, Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0), depth=1)

        assert color == Vec3(255.0, 127.5, 127.5)

    def test_fully_reflective_shows_background(self):
        from raycaster.core.integrator import cast
        from raycaster.core.vector import Vec3
        from raycaster.scene.manager import WHITE

        scene = self._mirror_scene(1.0)
        assert cast(scene, Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0), depth=1) == WHITE

    def test_depth_zero_returns_local_color(self):
        from raycaster.core.integrator import cast
        from raycaster.core.vector import Vec3

        reflective = self._mirror_scene(0.5)
        matte = self._mirror_scene(0.0)
        origin = Vec3(0.0, 0.0, 0.0)
        direction = Vec3(0.0, 0.0, 1.0)

        assert cast(reflective, origin, direction, depth=0) == cast(matte, origin, direction, depth=3)
        assert cast(reflective, origin, direction, depth=0) == Vec3(255.0, 0.0, 0.0)

    def test_non_reflective_surface_does_not_recurse(self, monkeypatch):
        from raycaster.core import integrator
        from raycaster.core.vector import Vec3

        calls = self._count_casts(monkeypatch)
        integrator.cast(self._mirror_scene(0.0), Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0), 3)
        assert len(calls) == 1

    def test_reflective_surface_recurses_once_per_bounce(self, monkeypatch):
        from raycaster.core import integrator
        from raycaster.core.vector import Vec3

        calls = self._count_casts(monkeypatch)
        integrator.cast(self._mirror_scene(0.5), Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0), 3)

        # Primary ray plus the reflected ray, which escapes the scene
        assert len(calls) == 2
        _, origin, direction, depth = calls[1]
        assert origin == Vec3(0.0, 0.0, 2.0)
        assert direction == Vec3(0.0, 0.0, -1.0)
        assert depth == 2

    def test_interreflection_bounded_by_depth(self, monkeypatch):
        """Two facing mirrors bounce until the depth runs out."""
        from raycaster.core import integrator
        from raycaster.core.vector import Vec3
        from raycaster.scene.manager import SceneManager

        manager = SceneManager()
        manager.add_sphere((0.0, 0.0, 3.0), 1.0, (255.0, 0.0, 0.0), reflectivity=0.5)
        manager.add_sphere((0.0, 0.0, -3.0), 1.0, (0.0, 0.0, 255.0), reflectivity=0.5)
        manager.add_ambient_light(1.0)
        scene = manager.build()

        calls = self._count_casts(monkeypatch)
        color = integrator.cast(scene, Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0), 2)

        assert len(calls) == 3
        # red/2 + (blue/2 + red/2)/2
        assert color == Vec3(255.0 * 0.75, 0.0, 255.0 * 0.25)


class TestViewVector:
    """The view vector is the negated incoming direction."""

    def test_view_is_negated_direction(self, monkeypatch):
        from raycaster.core import integrator
        from raycaster.core.vector import Vec3
        from raycaster.scene.manager import SceneManager

        manager = SceneManager()
        manager.add_sphere((0.0, 0.0, 0.0), 1.0, (255.0, 255.0, 255.0))
        manager.add_ambient_light(0.5)
        scene = manager.build()

        views = []

        def recording_light_intensity(light, scene, point, normal, view, object_index):
            views.append(view)
            return 0.0

        monkeypatch.setattr(integrator, "light_intensity", recording_light_intensity)
        integrator.cast(scene, Vec3(0.0, 5.0, 0.0), Vec3(0.0, -2.0, 0.0))

        assert views == [Vec3(0.0, 2.0, 0.0)]


class TestRenderImage:
    """Tests for whole-image rendering."""

    def test_image_shape_and_rows(self, red_sphere_scene):
        import numpy as np

        from raycaster.camera.pinhole import CanvasCamera
        from raycaster.core.integrator import render_image, render_pixel

        camera = CanvasCamera(8, 6)
        image = render_image(red_sphere_scene, camera)

        assert image.shape == (6, 8, 3)
        assert image.dtype == np.float32
        expected = render_pixel(red_sphere_scene, camera, 4, 5)
        assert np.allclose(image[5, 4], expected.to_tuple(), atol=1e-3)

    def test_progress_callback_per_row(self, red_sphere_scene):
        from raycaster.camera.pinhole import CanvasCamera
        from raycaster.core.integrator import render_image

        progress = []
        render_image(red_sphere_scene, CanvasCamera(4, 3), callback=lambda done, total: progress.append((done, total)))

        assert progress == [(1, 3), (2, 3), (3, 3)]
