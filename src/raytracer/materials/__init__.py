"""Materials module.

Components:
    phong: Phong material (ambient, diffuse, specular, shininess) and the
        lighting() function
"""

from .phong import Material, lighting

__all__ = ["Material", "lighting"]
