"""Taichi-based Whitted-style ray tracer.

This package renders scenes of spheres and planes lit by point and
directional lights, with hard shadows and mirror reflections:
- Scenes described in code or loaded from JSON files
- Double-precision ray/shape intersection in Taichi kernels
- Saturating 8-bit RGBA shading with a reflection depth budget
- PNG (or any Pillow format) output

Subpackages:
    core: Rays, colours, the shading integrator and the pixel loop
    geometry: Sphere and plane intersection
    materials: Base colour, albedo and reflectiveness storage
    lights: Point and directional lights
    scene: Scene descriptions, JSON loading and the element table
    camera: Pinhole camera with ray generation
    output: Image encoding

Modules:
    cli: Command-line entry point
"""

__version__ = "0.1.0"
