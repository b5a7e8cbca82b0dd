"""csgtrace: a Whitted-style ray tracer with CSG.

Objects (unit spheres and cones, and boolean combinations of them) are
placed with affine transforms and lit by point lights with ambient,
diffuse, specular and mirror terms. Scenes can be built in Python or read
from plain-text scene description files.

Subpackages:
    core: rays, colours, transforms, shading and the render loop
    geometry: primitives, CSG and hit records
    materials: surface materials
    camera: cameras
    scene: scene aggregate, lights and the scene file reader
    preview: image export and preview windows
"""

__version__ = "0.1.0"
