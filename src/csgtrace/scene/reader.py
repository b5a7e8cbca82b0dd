"""Plain-text scene description reader.

Scene files are a sequence of blocks. Each block starts with a keyword and
runs to a matching End. Keywords are case-insensitive and tokens are
separated by whitespace; a token starting with # comments out the rest of
its line.

    # A red sphere seen from the front
    Scene
        backgroundColour 0.1 0.1 0.2
        ambientLight 0.2 0.2 0.2
        renderSize 320 240
        rayDepth 3
        filename sphere.png
    End

    Camera PinholeCamera 1.5
        Translate 0 0 -5
    End

    Light PointLight
        Location 0 -5 -5
        Colour 30 30 30
    End

    Material Red
        Colour 1 0 0
        Specular 1 1 1 20
    End

    Object Sphere
        Material Red
        Scale 1.5
    End

Object blocks nest for CSG: "Object CSG Difference" is followed by two
complete Object ... End blocks (the left and right operands) and then the
properties of the CSG node itself.

Transforms (Rotate X|Y|Z degrees, Translate x y z, Scale s,
Scale3 sx sy sz) are applied in the order they are written.

Example:
    >>> from csgtrace.scene.reader import SceneReader
    >>> from csgtrace.scene.scene import Scene
    >>> scene = Scene()
    >>> reader = SceneReader(scene)
    >>> reader.read("examples/scenes/spheres.txt")
"""

from __future__ import annotations

import dataclasses
import logging
import math
import os
from collections import deque
from collections.abc import Callable

from csgtrace.camera.pinhole import Camera, PinholeCamera
from csgtrace.core.colour import Colour
from csgtrace.core.ray import vec3
from csgtrace.geometry.cone import Cone
from csgtrace.geometry.csg import Csg, CsgOperation
from csgtrace.geometry.primitive import Primitive
from csgtrace.geometry.sphere import Sphere
from csgtrace.materials.material import Material
from csgtrace.scene.lights import LightSource, PointLight
from csgtrace.scene.scene import Scene

logger = logging.getLogger(__name__)


class SceneReadError(ValueError):
    """A scene description could not be read.

    Attributes:
        line: Line on which the offending block starts, if known.
        source: Name of the file (or other source) being read.
    """

    def __init__(self, message: str, line: int | None = None, source: str | None = None) -> None:
        self.line = line
        self.source = source
        where = []
        if line is not None:
            where.append(f"in block starting on line {line}")
        if source is not None:
            where.append(f"of {source}")
        super().__init__(" ".join([message, *where]))


class _TokenBlock:
    """Tokens of one block, consumed front to back."""

    def __init__(self, tokens: list[str], line: int, source: str) -> None:
        self._tokens = deque(tokens)
        self.line = line
        self.source = source

    def __bool__(self) -> bool:
        return bool(self._tokens)

    def peek(self) -> str | None:
        return self._tokens[0] if self._tokens else None

    def pop(self) -> str:
        if not self._tokens:
            raise self.error("Unexpected end of block")
        return self._tokens.popleft()

    def error(self, message: str) -> SceneReadError:
        return SceneReadError(message, self.line, self.source)

    def number(self) -> float:
        token = self.pop()
        try:
            value = float(token)
        except ValueError:
            raise self.error(f"Expected a number but found '{token}'") from None
        if not math.isfinite(value):
            raise self.error(f"Expected a finite number but found '{token}'")
        return value

    def integer(self) -> int:
        return int(self.number())

    def colour(self) -> Colour:
        return Colour(self.number(), self.number(), self.number())

    def take_object(self) -> _TokenBlock:
        """Split off a nested Object ... End block (without those keywords)."""
        start = self.pop()
        if start != "OBJECT":
            raise self.error(f"Expected OBJECT but found '{start}'")
        depth = 1
        tokens = []
        while True:
            token = self.pop()
            if token == "OBJECT":
                depth += 1
            elif token == "END":
                depth -= 1
                if depth == 0:
                    break
            tokens.append(token)
        return _TokenBlock(tokens, self.line, self.source)


class SceneReader:
    """Reads scene description files into a Scene.

    One reader can read several files into the same scene; materials
    defined in earlier files stay available to later ones.

    Attributes:
        scene: The scene being populated.
        materials: Named materials defined so far, keyed by upper-case name.
    """

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self.materials: dict[str, Material] = {}
        self._block_parsers: dict[str, Callable[[_TokenBlock], None]] = {
            "SCENE": self._parse_scene_block,
            "CAMERA": self._parse_camera_block,
            "LIGHT": self._parse_light_block,
            "MATERIAL": self._parse_material_block,
            "OBJECT": self._parse_top_level_object,
        }

    # =========================================================================
    # Entry points
    # =========================================================================

    def read(self, path: str | os.PathLike[str]) -> None:
        """Read a scene file.

        Raises:
            OSError: If the file cannot be opened.
            SceneReadError: If the file is not a valid scene description.
        """
        path = os.fspath(path)
        logger.info("Reading scene from %s", path)
        with open(path, encoding="utf-8") as handle:
            self.read_string(handle.read(), source=path)

    def read_string(self, text: str, source: str = "<string>") -> None:
        """Read a scene description from a string.

        Raises:
            SceneReadError: If the text is not a valid scene description.
        """
        tokens: list[str] = []
        start_line = 0
        depth = 0

        for line_number, line in enumerate(text.splitlines(), start=1):
            for token in line.upper().split():
                if token.startswith("#"):
                    break
                if not tokens:
                    start_line = line_number
                if token == "OBJECT":
                    depth += 1
                    tokens.append(token)
                elif token == "END":
                    depth = max(depth - 1, 0)
                    if depth:
                        tokens.append(token)
                    elif tokens:
                        self._parse_block(_TokenBlock(tokens, start_line, source))
                        tokens = []
                    else:
                        raise SceneReadError("Unexpected END", line_number, source)
                else:
                    tokens.append(token)

        if tokens:
            raise SceneReadError(f"Unexpected end of file in {source}", start_line)

    def _parse_block(self, block: _TokenBlock) -> None:
        block_type = block.pop()
        parser = self._block_parsers.get(block_type)
        if parser is None:
            raise block.error(f"Unexpected block type '{block_type}'")
        try:
            parser(block)
        except SceneReadError:
            raise
        except ValueError as exc:
            # Invalid values rejected by the scene objects (zero scale, ...)
            raise block.error(str(exc)) from exc

    # =========================================================================
    # Scene settings
    # =========================================================================

    def _parse_scene_block(self, block: _TokenBlock) -> None:
        changes: dict[str, object] = {}
        while block:
            token = block.pop()
            if token == "AMBIENTLIGHT":
                changes["ambient_light"] = block.colour()
            elif token == "BACKGROUNDCOLOUR":
                changes["background_colour"] = block.colour()
            elif token == "RENDERSIZE":
                changes["render_width"] = block.integer()
                changes["render_height"] = block.integer()
            elif token == "FILENAME":
                changes["filename"] = block.pop().lower()
            elif token == "RAYDEPTH":
                changes["max_ray_depth"] = block.integer()
            else:
                raise block.error(f"Unexpected token '{token}'")
        self.scene.settings = dataclasses.replace(self.scene.settings, **changes)

    # =========================================================================
    # Cameras and lights
    # =========================================================================

    def _parse_camera_block(self, block: _TokenBlock) -> None:
        camera_type = block.pop()
        if camera_type == "PINHOLECAMERA":
            camera: Camera = PinholeCamera(block.number())
        else:
            raise block.error(f"Unexpected camera type '{camera_type}'")

        while block:
            token = block.pop()
            if not self._apply_transform_token(token, block, camera):
                raise block.error(f"Unexpected token '{token}'")
        self.scene.set_camera(camera)

    def _parse_light_block(self, block: _TokenBlock) -> None:
        light_type = block.pop()
        if light_type == "POINTLIGHT":
            light: LightSource = PointLight()
        else:
            raise block.error(f"Unexpected light type '{light_type}'")

        while block:
            token = block.pop()
            if token == "LOCATION":
                light.location = vec3(block.number(), block.number(), block.number())
            elif token == "COLOUR":
                light.colour = block.colour()
            else:
                raise block.error(f"Unexpected token '{token}'")
        self.scene.add_light(light)

    # =========================================================================
    # Materials
    # =========================================================================

    def _parse_material_block(self, block: _TokenBlock) -> None:
        name = block.pop()
        if name in self.materials:
            logger.warning(
                "Duplicate definition of material '%s' in block starting on line %d of %s",
                name,
                block.line,
                block.source,
            )
        material = self.materials.get(name, Material())

        while block:
            token = block.pop()
            updated = self._apply_material_token(token, block, material)
            if updated is None:
                raise block.error(f"Unexpected token '{token}'")
            material = updated
        self.materials[name] = material

    def _apply_material_token(
        self, token: str, block: _TokenBlock, material: Material
    ) -> Material | None:
        """Apply a material property token, or return None if it is not one."""
        if token == "COLOUR":
            return material.with_colour(block.colour())
        if token == "AMBIENT":
            return material.with_ambient(block.colour())
        if token == "DIFFUSE":
            return material.with_diffuse(block.colour())
        if token == "SPECULAR":
            return material.with_specular(block.colour(), block.number())
        if token == "MIRROR":
            return material.with_mirror(block.colour())
        return None

    # =========================================================================
    # Objects
    # =========================================================================

    def _parse_top_level_object(self, block: _TokenBlock) -> None:
        self.scene.show(self._parse_object(block))

    def _parse_object(self, block: _TokenBlock) -> int:
        """Parse an object block and store it in the arena.

        Returns:
            The arena index of the new primitive.
        """
        object_type = block.pop()
        if object_type == "SPHERE":
            primitive: Primitive = Sphere()
        elif object_type == "CONE":
            primitive = Cone()
        elif object_type == "CSG":
            primitive = self._parse_csg(block)
        else:
            raise block.error(f"Unexpected object type '{object_type}'")

        while block:
            token = block.pop()
            if self._apply_transform_token(token, block, primitive):
                continue
            if token == "MATERIAL":
                name = block.pop()
                if name not in self.materials:
                    raise block.error(f"Undefined material '{name}'")
                primitive.material = self.materials[name]
                continue
            updated = self._apply_material_token(token, block, primitive.material)
            if updated is None:
                raise block.error(f"Unexpected token '{token}'")
            primitive.material = updated

        return self.scene.add_primitive(primitive)

    def _parse_csg(self, block: _TokenBlock) -> Csg:
        name = block.pop()
        try:
            operation = CsgOperation.parse(name)
        except ValueError:
            raise block.error(f"Unimplemented CSG operation '{name}'") from None

        children = []
        for side in ("left", "right"):
            if block.peek() != "OBJECT":
                raise block.error(f"Missing {side} CSG tree Object")
            children.append(self._parse_object(block.take_object()))

        return Csg(self.scene.arena, operation, children[0], children[1])

    # =========================================================================
    # Shared helpers
    # =========================================================================

    def _apply_transform_token(
        self, token: str, block: _TokenBlock, target: Camera | Primitive
    ) -> bool:
        """Apply a transform token to a camera or primitive.

        Returns:
            True if the token was a transform, False otherwise.
        """
        if token == "ROTATE":
            axis = block.pop()
            angle = block.number()
            if axis == "X":
                target.transform = target.transform.rotated_x(angle)
            elif axis == "Y":
                target.transform = target.transform.rotated_y(angle)
            elif axis == "Z":
                target.transform = target.transform.rotated_z(angle)
            else:
                raise block.error(f"Unexpected axis '{axis}'")
        elif token == "TRANSLATE":
            target.transform = target.transform.translated(
                block.number(), block.number(), block.number()
            )
        elif token == "SCALE":
            target.transform = target.transform.scaled(block.number())
        elif token == "SCALE3":
            target.transform = target.transform.scaled(
                block.number(), block.number(), block.number()
            )
        else:
            return False
        return True


def read_scene(*paths: str | os.PathLike[str], scene: Scene | None = None) -> Scene:
    """Read one or more scene files into a single Scene.

    Args:
        *paths: Scene files, read in order.
        scene: Scene to populate. A new one is created if omitted.

    Returns:
        The populated scene.

    Raises:
        OSError: If a file cannot be opened.
        SceneReadError: If a file is not a valid scene description.
    """
    scene = scene if scene is not None else Scene()
    reader = SceneReader(scene)
    for path in paths:
        reader.read(path)
    return scene
