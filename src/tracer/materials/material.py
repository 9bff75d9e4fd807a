"""Diffuse + mirror material model.

A material combines a Lambertian diffuse term with a perfect mirror term:

    diffuse = light_color * max(0, n . l) * brightness * (albedo / pi) * base_color
    color   = diffuse * (1 - reflectiveness) (+) reflected_color

where (+) is saturating 8-bit addition. ``albedo`` scales how much incident
light the surface scatters and ``reflectiveness`` mixes in the mirror
reflection. Neither value is clamped: they are expected in [0, 1] but used
as given.

Material properties live in Taichi fields indexed by material ID so the
integrator can look them up per hit.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from src.tracer.materials.material import Material, add_material
    >>> from src.tracer.core.color import Color
    >>> mat_id = add_material(Material(Color(255, 0, 0, 255), albedo=0.18, reflectiveness=0.0))
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.tracer.core.color import Color, rgba


@dataclass(frozen=True)
class Material:
    """Appearance of a renderable.

    Attributes:
        base_color: The surface colour. Only r, g, b take part in shading.
        albedo: Diffuse reflectance scale, expected in [0, 1].
        reflectiveness: Mirror mix factor, expected in [0, 1]. Zero disables
            reflection rays for this material.
    """

    base_color: Color
    albedo: float
    reflectiveness: float


# =============================================================================
# Material Field Storage
# =============================================================================

MAX_MATERIALS = 1024

material_base_colors = ti.Vector.field(4, dtype=ti.i32, shape=MAX_MATERIALS)
material_albedos = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
material_reflectiveness = ti.field(dtype=ti.f64, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(material: Material) -> int:
    """Add a material to the registry.

    Args:
        material: The material to store.

    Returns:
        The material ID (index into the material fields).

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_base_colors[idx] = list(material.base_color.as_tuple())
    material_albedos[idx] = float(material.albedo)
    material_reflectiveness[idx] = float(material.reflectiveness)
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the registry."""
    return int(num_materials[None])


@ti.func
def get_base_color(material_id: ti.i32) -> rgba:
    """Get the base colour of a material."""
    return material_base_colors[material_id]


@ti.func
def get_albedo(material_id: ti.i32) -> ti.f64:
    """Get the albedo of a material."""
    return material_albedos[material_id]


@ti.func
def get_reflectiveness(material_id: ti.i32) -> ti.f64:
    """Get the reflectiveness of a material."""
    return material_reflectiveness[material_id]


@ti.func
def amount_reflected(material_id: ti.i32) -> ti.f64:
    """Lambertian BRDF scale for a material: albedo / pi."""
    return material_albedos[material_id] / tm.pi
