"""Phong-style surface material.

A Material bundles the colours that drive the local illumination model:

    colour = ambient_light * ambient
           + sum over lights of
                 light * (diffuse * max(0, n.l) + specular * max(0, r.l)^exponent)
           + mirror * reflected_colour

Materials are immutable values. Every primitive owns one and every Hit
carries a copy of it, so editing a scene never changes hits already
computed.

Example:
    >>> from csgtrace.core.colour import Colour
    >>> from csgtrace.materials.material import Material
    >>> red = Material().with_colour(Colour(1.0, 0.0, 0.0))
    >>> red.diffuse
    Colour(red=1.0, green=0.0, blue=0.0)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from csgtrace.core.colour import BLACK, WHITE, Colour


@dataclass(frozen=True)
class Material:
    """Colour and reflectance properties of a surface.

    Attributes:
        ambient: Colour under white ambient light.
        diffuse: Colour under direct white light.
        specular: Colour of specular highlights. Black disables highlights.
        specular_exponent: Hardness of the highlights. Larger values give
            smaller, sharper highlights.
        mirror: Colour of reflected rays. Black disables reflections.
    """

    ambient: Colour = WHITE
    diffuse: Colour = WHITE
    specular: Colour = BLACK
    specular_exponent: float = 1.0
    mirror: Colour = BLACK

    def with_colour(self, colour: Colour) -> Material:
        """Set ambient and diffuse colour together."""
        return dataclasses.replace(self, ambient=colour, diffuse=colour)

    def with_ambient(self, colour: Colour) -> Material:
        return dataclasses.replace(self, ambient=colour)

    def with_diffuse(self, colour: Colour) -> Material:
        return dataclasses.replace(self, diffuse=colour)

    def with_specular(self, colour: Colour, exponent: float) -> Material:
        return dataclasses.replace(self, specular=colour, specular_exponent=exponent)

    def with_mirror(self, colour: Colour) -> Material:
        return dataclasses.replace(self, mirror=colour)

    @property
    def is_reflective(self) -> bool:
        """Whether reflected rays contribute to this surface's colour."""
        return not self.mirror.is_black()


DEFAULT_MATERIAL = Material()
