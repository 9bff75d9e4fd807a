"""Materials module.

Components:
    material: Lambertian diffuse + mirror reflection material and its
        field-backed registry

The shading model is intentionally simple: a Lambertian term scaled by
albedo / pi, hard shadows, and a mirror reflection mixed in by
reflectiveness. There are no microfacet or refractive models.
"""

from .material import (
    MAX_MATERIALS,
    Material,
    add_material,
    amount_reflected,
    clear_materials,
    get_albedo,
    get_base_color,
    get_material_count,
    get_reflectiveness,
)

__all__ = [
    "Material",
    "MAX_MATERIALS",
    "add_material",
    "clear_materials",
    "get_material_count",
    "get_base_color",
    "get_albedo",
    "get_reflectiveness",
    "amount_reflected",
]
