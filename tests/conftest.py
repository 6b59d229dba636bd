"""Pytest configuration for raycaster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f32)
    yield


@pytest.fixture
def red_sphere_scene():
    """One red sphere below the view axis with an ambient and a point light."""
    from raycaster.scene.manager import SceneManager

    manager = SceneManager()
    manager.add_sphere((0.0, -1.0, 3.0), 1.0, (255.0, 0.0, 0.0))
    manager.add_ambient_light(0.2)
    manager.add_point_light(0.6, (2.0, 1.0, 0.0))
    return manager.build()


@pytest.fixture
def reference_scene():
    """The four-sphere reference scene."""
    from raycaster.scene.reference import create_reference_scene

    return create_reference_scene()
