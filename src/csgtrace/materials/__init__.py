"""Materials module for surface appearance.

Components:
    material: Phong-style Material value (ambient, diffuse, specular,
        mirror colours and specular exponent)
"""

from .material import DEFAULT_MATERIAL, Material

__all__ = [
    "Material",
    "DEFAULT_MATERIAL",
]
