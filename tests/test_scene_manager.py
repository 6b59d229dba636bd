"""Unit tests for SceneManager and scene files.

Tests cover:
- Adding spheres and lights, and validation on add
- Building immutable scenes
- Dictionary and JSON serialization
"""

import json

import pytest


class TestSceneManagerBuild:
    """Tests for building scenes."""

    def test_add_returns_indices(self):
        from raycaster.scene.manager import SceneManager

        manager = SceneManager()
        assert manager.add_sphere((0.0, 0.0, 3.0), 1.0, (255.0, 0.0, 0.0)) == 0
        assert manager.add_sphere((1.0, 0.0, 3.0), 0.5, (0.0, 255.0, 0.0)) == 1
        assert manager.add_ambient_light(0.2) == 0
        assert manager.add_point_light(0.6, (2.0, 1.0, 0.0)) == 1
        assert manager.add_directional_light(0.2, (1.0, 4.0, 4.0)) == 2
        assert manager.get_sphere_count() == 2
        assert manager.get_light_count() == 3

    def test_build_produces_immutable_snapshot(self):
        from raycaster.scene.manager import SceneManager

        manager = SceneManager()
        manager.add_sphere((0.0, 0.0, 3.0), 1.0, (255.0, 0.0, 0.0))
        scene = manager.build()

        manager.add_sphere((1.0, 0.0, 3.0), 1.0, (0.0, 255.0, 0.0))
        assert len(scene.spheres) == 1
        assert isinstance(scene.spheres, tuple)
        assert isinstance(scene.lights, tuple)

    def test_default_background_is_black(self):
        from raycaster.scene.manager import BLACK, SceneManager

        assert SceneManager().build().background == BLACK

    def test_set_background(self):
        from raycaster.scene.manager import WHITE, SceneManager

        manager = SceneManager()
        manager.set_background((255, 255, 255))
        assert manager.build().background == WHITE

    def test_specular_none_means_no_highlight(self):
        from raycaster.geometry.sphere import NO_SPECULAR
        from raycaster.scene.manager import SceneManager

        manager = SceneManager()
        manager.add_sphere((0.0, 0.0, 3.0), 1.0, (255.0, 0.0, 0.0))
        assert manager.build().spheres[0].specular == NO_SPECULAR

    def test_invalid_sphere_rejected(self):
        from raycaster.scene.manager import SceneManager

        manager = SceneManager()
        with pytest.raises(ValueError):
            manager.add_sphere((0.0, 0.0, 3.0), -1.0, (255.0, 0.0, 0.0))
        assert manager.get_sphere_count() == 0

    def test_clear(self):
        from raycaster.scene.manager import DEFAULT_BACKGROUND, SceneManager

        manager = SceneManager()
        manager.add_sphere((0.0, 0.0, 3.0), 1.0, (255.0, 0.0, 0.0))
        manager.add_ambient_light(0.2)
        manager.set_background((255, 255, 255))
        manager.clear()

        assert manager.get_sphere_count() == 0
        assert manager.get_light_count() == 0
        assert manager.background == DEFAULT_BACKGROUND

    def test_from_scene(self, reference_scene):
        from raycaster.scene.manager import SceneManager

        manager = SceneManager.from_scene(reference_scene)
        assert manager.build() == reference_scene


class TestSceneSerialization:
    """Tests for dictionary and JSON scene files."""

    def test_dict_round_trip(self, reference_scene):
        from raycaster.scene.manager import SceneManager

        data = SceneManager.from_scene(reference_scene).to_dict()

        manager = SceneManager()
        manager.from_dict(data)
        assert manager.build() == reference_scene

    def test_to_dict_layout(self, reference_scene):
        from raycaster.scene.manager import SceneManager

        data = SceneManager.from_scene(reference_scene).to_dict()

        assert data["background"] == [0.0, 0.0, 0.0]
        assert data["spheres"][0]["center"] == [0.0, -1.0, 3.0]
        assert data["spheres"][0]["specular"] == 500.0
        assert [light["type"] for light in data["lights"]] == ["ambient", "point", "directional"]
        assert data["lights"][1]["position"] == [2.0, 1.0, 0.0]
        assert data["lights"][2]["direction"] == [1.0, 4.0, 4.0]

    def test_missing_specular_loads_as_matte(self):
        from raycaster.scene.manager import SceneManager

        manager = SceneManager()
        manager.from_dict({"spheres": [{"center": [0, 0, 3], "radius": 1, "color": [255, 0, 0]}]})
        assert not manager.build().spheres[0].has_specular

    def test_unknown_light_type_raises(self):
        from raycaster.scene.manager import SceneManager

        manager = SceneManager()
        with pytest.raises(ValueError, match="Unknown light type"):
            manager.from_dict({"lights": [{"type": "spot", "intensity": 1.0}]})

    def test_point_light_without_position_raises(self):
        from raycaster.scene.manager import SceneManager

        manager = SceneManager()
        with pytest.raises(ValueError, match="position"):
            manager.from_dict({"lights": [{"type": "point", "intensity": 1.0}]})

    def test_json_file_round_trip(self, tmp_path, reference_scene):
        from raycaster.scene.manager import load_scene, save_scene

        path = tmp_path / "scene.json"
        save_scene(reference_scene, path)

        with open(path) as f:
            data = json.load(f)
        assert len(data["spheres"]) == 4

        assert load_scene(path) == reference_scene

    def test_load_invalid_scene_raises(self, tmp_path):
        from raycaster.scene.manager import load_scene

        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"spheres": [{"center": [0, 0, 3], "radius": 0, "color": [1, 1, 1]}]}))

        with pytest.raises(ValueError):
            load_scene(path)
