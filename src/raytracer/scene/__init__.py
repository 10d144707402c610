"""Scene module.

Components:
    light: Point light source
    world: Objects and lights, shadow tests and hit shading
    config: Immutable SceneConfig shared with render workers
    presets: Ready-made scenes (three spheres demo, default world)

Only light and world are imported here; config and presets depend on the
camera, which itself depends on the world. Import them directly:
    from raytracer.scene.config import SceneConfig
    from raytracer.scene.presets import three_spheres_scene
"""

from .light import PointLight
from .world import BACKGROUND, World, default_world

__all__ = ["PointLight", "World", "BACKGROUND", "default_world"]
