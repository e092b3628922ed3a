"""CPU ray tracer for scenes of spheres.

This package renders static scenes with Monte Carlo path tracing on the
CPU, spreading image rows across worker threads. It supports:
- Diffuse, metal and dielectric (glass) materials
- Sphere primitives, including hollow (negative radius) shells
- Thin-lens cameras with anti-aliasing and depth of field
- PPM and PNG output

Subpackages:
    core: Vectors, rays, intervals, the color integrator and the render scheduler
    geometry: Shape primitives and intersection records
    materials: Scattering models
    scene: Scene container and ready-made demo scenes
    camera: Thin-lens camera with ray generation
    preview: Color conversion and image export
"""

__version__ = "0.1.0"
