"""Core data structures for urdf_kinbody.

This module provides the parsed-document model read from URDF files, the
body records produced from it, and the error raised when loading fails.
"""

from .document import (
    Box,
    Collision,
    Cylinder,
    Geometry,
    Inertial,
    JointNode,
    JointType,
    Limits,
    LinkNode,
    Material,
    Mesh,
    Mimic,
    Pose,
    SourceDocument,
    Sphere,
    UnknownGeometry,
    Visual,
)
from .errors import LoadError
from .records import (
    BodyJointType,
    GeometryRecord,
    GeometryType,
    JointMimic,
    JointRecord,
    LinkRecord,
    TriMesh,
)

__all__ = [
    "Box",
    "Collision",
    "Cylinder",
    "Geometry",
    "Inertial",
    "JointNode",
    "JointType",
    "Limits",
    "LinkNode",
    "Material",
    "Mesh",
    "Mimic",
    "Pose",
    "SourceDocument",
    "Sphere",
    "UnknownGeometry",
    "Visual",
    "LoadError",
    "BodyJointType",
    "GeometryRecord",
    "GeometryType",
    "JointMimic",
    "JointRecord",
    "LinkRecord",
    "TriMesh",
]
