"""Taichi-based sphere ray tracer with local lighting and hard shadows.

This package casts one primary ray per pixel into a scene of spheres and
shades the closest hit with:
- Distance and flat material visualizations
- Ambient plus Lambertian diffuse lighting from point lights
- Hard shadows via shadow rays

Subpackages:
    core: Vector utilities, rays, image buffer and the shading pipeline
    geometry: Sphere primitive and intersection
    materials: Material registry and the diffuse lighting term
    scene: Scene storage, lights, closest-hit and shadow queries
    camera: Pinhole camera with look-at ray generation
    preview: PPM/PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
