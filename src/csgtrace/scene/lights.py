"""Light sources.

A light has a colour and a world-space location. How bright it is at a
given point is up to the concrete light type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from csgtrace.core.colour import WHITE, Colour
from csgtrace.core.ray import EPSILON, Vec3, as_vec3, length, vec3


class LightSource(ABC):
    """Abstract base class for lights.

    Attributes:
        colour: Colour of the emitted light.
        location: World-space position of the light.
    """

    def __init__(self, location: Vec3 | None = None, colour: Colour = WHITE) -> None:
        self.location = vec3(0.0, 0.0, 0.0) if location is None else as_vec3(location)
        self.colour = colour

    @abstractmethod
    def intensity_at(self, point: Vec3) -> float:
        """Scale factor applied to the light's colour at a world-space point."""


class PointLight(LightSource):
    """Point light with inverse-square falloff.

    The distance is clamped below at EPSILON so the intensity stays finite
    for points on top of the light.
    """

    def __repr__(self) -> str:
        return f"PointLight(location={self.location.tolist()}, colour={self.colour!r})"

    def intensity_at(self, point: Vec3) -> float:
        distance = max(length(self.location - point), EPSILON)
        return 1.0 / (distance * distance)
