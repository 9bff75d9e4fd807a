"""Scene module for scene descriptions and ray-scene queries.

Components:
    description: Host-side scene graph (shapes, renderables, Scene)
    loader: JSON scene files to and from Scene
    intersection: Element table in Taichi fields and nearest-hit search
    manager: Uploads a Scene into the Taichi fields (import directly)
    showcase: Sample scene exercising every feature

Scene data is organized for efficient kernel access:
    - Structure-of-Arrays layout per shape kind
    - A single element table preserving insertion order
    - One material per element
"""

from .description import (
    Light,
    PlaneShape,
    Renderable,
    Scene,
    Shape,
    SphereShape,
)
from .intersection import (
    MAX_ELEMENTS,
    MAX_PLANES,
    MAX_SPHERES,
    SceneHitRecord,
    ShapeKind,
    TraceResult,
    add_plane,
    add_sphere,
    clear_scene,
    get_element_count,
    get_plane_count,
    get_sphere_count,
    intersect_scene,
    trace_ray,
)
from .loader import (
    SceneLoadError,
    load_scene,
    scene_from_dict,
    scene_from_json,
    scene_to_dict,
)
from .showcase import create_showcase_scene

# Note: manager is NOT imported here to avoid circular imports (it depends on
# the integrator, which depends on intersection). Import it directly from
# src.tracer.scene.manager.

__all__ = [
    # Description module
    "Light",
    "PlaneShape",
    "Renderable",
    "Scene",
    "Shape",
    "SphereShape",
    # Intersection module
    "SceneHitRecord",
    "ShapeKind",
    "TraceResult",
    "add_sphere",
    "add_plane",
    "clear_scene",
    "get_element_count",
    "get_sphere_count",
    "get_plane_count",
    "intersect_scene",
    "trace_ray",
    "MAX_ELEMENTS",
    "MAX_SPHERES",
    "MAX_PLANES",
    # Loader module
    "SceneLoadError",
    "load_scene",
    "scene_from_dict",
    "scene_from_json",
    "scene_to_dict",
    # Showcase module
    "create_showcase_scene",
]
