"""Python ray tracer with a round-robin pixel-dispatch scheduler.

This package renders scenes of spheres, planes and point lights with Phong
shading, and can distribute the per-pixel work across a fixed worker pool:
- 4x4 matrix and tuple algebra for transforms
- Ray-shape intersection with shadow testing
- Pinhole camera producing one or more rays per pixel
- Streaming pixel results to a canvas or an interactive display sink

Subpackages:
    core: Tuples, matrices, rays, canvas, render entry points and the scheduler
    geometry: Shape capability protocol, spheres and planes
    materials: Phong material model and lighting
    scene: Point lights, world, immutable scene configuration and presets
    camera: Camera model with ray generation
    preview: Image export and preview utilities
"""

__version__ = "0.1.0"
