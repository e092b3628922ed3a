"""Materials module for scattering models.

Components:
    material: Base material interface and ScatterRecord
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)

Each material provides scatter(ray_in, rec, rng), returning a
ScatterRecord with the attenuation and outgoing ray, or None when the
ray is absorbed. Material instances are shared by reference between
primitives.
"""

from .dielectric import Dielectric, refraction_ratio, will_reflect
from .lambertian import Lambertian
from .material import Material, ScatterRecord, validate_albedo
from .metal import Metal

__all__ = [
    "Material",
    "ScatterRecord",
    "validate_albedo",
    "Lambertian",
    "Metal",
    "Dielectric",
    "refraction_ratio",
    "will_reflect",
]
