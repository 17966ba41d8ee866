"""
Rigid-body transform helpers used while translating URDF frames.

This module provides pure JAX implementations of:
- SO(3) rotations (so3 module), including URDF roll/pitch/yaw conversion
- SE(3) homogeneous transforms (se3 module)
"""

from . import so3
from . import se3

__all__ = [
    "so3",
    "se3",
]
