"""Camera module.

Components:
    pinhole: Pinhole camera producing rays through pixel centers or
        stratified sub-pixel offsets
"""

from .pinhole import Camera, sample_offsets

__all__ = ["Camera", "sample_offsets"]
