"""Pytest configuration for csgtrace tests.

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
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture
def scene_file(tmp_path):
    """Write scene description text to a temporary file and return its path."""

    def _write(text: str, name: str = "scene.txt"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def lit_sphere_scene():
    """Unit sphere at the origin, camera at z = -5, white light at (0, 0, 5).

    The material is white diffuse with no specular term, ambient light is
    0.1 grey and the background is black.
    """
    from csgtrace.camera.pinhole import PinholeCamera
    from csgtrace.core.colour import Colour
    from csgtrace.core.transform import AffineTransform
    from csgtrace.geometry.sphere import Sphere
    from csgtrace.scene.lights import PointLight
    from csgtrace.scene.scene import Scene, SceneSettings

    scene = Scene(SceneSettings(ambient_light=Colour(0.1, 0.1, 0.1), render_width=8, render_height=6))
    scene.set_camera(PinholeCamera(1.0, AffineTransform().translated(0.0, 0.0, -5.0)))
    scene.new_object(Sphere())
    scene.add_light(PointLight(location=(0.0, 0.0, 5.0), colour=Colour(16.0, 16.0, 16.0)))
    return scene
