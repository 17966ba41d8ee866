"""Parsed URDF document model.

These dataclasses mirror the structure of a URDF file one-to-one: a table of
links and a table of joints keyed by name, where cross references (a joint's
parent and child link, a link's parent joint) are plain names resolved by
lookup. Nothing here is validated beyond what the parser enforces; the
translators in `urdf_kinbody.links` and `urdf_kinbody.joints` consume it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from jax import Array

from urdf_kinbody.transforms import se3

Vector3 = Tuple[float, float, float]
RGBA = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Pose:
    """URDF `<origin>`: a translation and fixed-axis roll/pitch/yaw."""
    xyz: Vector3 = (0.0, 0.0, 0.0)
    rpy: Vector3 = (0.0, 0.0, 0.0)

    @classmethod
    def identity(cls) -> "Pose":
        return cls()

    @property
    def matrix(self) -> Array:
        """4x4 homogeneous transform of this pose."""
        return se3.from_xyz_rpy(self.xyz, self.rpy)


# Geometry primitives. The set is closed: translators handle each of these
# explicitly and treat anything else as unsupported.

@dataclass(frozen=True)
class Sphere:
    radius: float


@dataclass(frozen=True)
class Box:
    size: Vector3  # full edge lengths, not half extents


@dataclass(frozen=True)
class Cylinder:
    radius: float
    length: float


@dataclass(frozen=True)
class Mesh:
    filename: str
    scale: Vector3 = (1.0, 1.0, 1.0)


@dataclass(frozen=True)
class UnknownGeometry:
    """A geometry element the parser did not recognize, kept by tag name."""
    tag: str


Geometry = Union[Sphere, Box, Cylinder, Mesh, UnknownGeometry]


@dataclass(frozen=True)
class Material:
    name: str = ""
    color: Optional[RGBA] = None


@dataclass(frozen=True)
class Inertial:
    """Mass properties. The full inertia tensor is kept as parsed."""
    mass: float = 0.0
    origin: Pose = field(default_factory=Pose)
    ixx: float = 0.0
    ixy: float = 0.0
    ixz: float = 0.0
    iyy: float = 0.0
    iyz: float = 0.0
    izz: float = 0.0


@dataclass(frozen=True)
class Collision:
    geometry: Geometry
    origin: Pose = field(default_factory=Pose)


@dataclass(frozen=True)
class Visual:
    geometry: Geometry
    origin: Pose = field(default_factory=Pose)
    material: Optional[Material] = None


@dataclass(frozen=True)
class LinkNode:
    name: str
    parent_joint: Optional[str] = None
    inertial: Optional[Inertial] = None
    collision: Optional[Collision] = None
    visual: Optional[Visual] = None


class JointType(Enum):
    REVOLUTE = "revolute"
    PRISMATIC = "prismatic"
    FIXED = "fixed"
    CONTINUOUS = "continuous"
    PLANAR = "planar"
    FLOATING = "floating"
    UNKNOWN = "unknown"

    @classmethod
    def from_urdf(cls, value: Optional[str]) -> "JointType":
        """Map a URDF `type` attribute to a JointType; unrecognized is UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Limits:
    lower: float = 0.0
    upper: float = 0.0
    velocity: float = 0.0
    effort: float = 0.0


@dataclass(frozen=True)
class Mimic:
    joint: str
    multiplier: float = 1.0
    offset: float = 0.0


@dataclass(frozen=True)
class JointNode:
    name: str
    type: JointType
    parent_link: str
    child_link: str
    origin: Pose = field(default_factory=Pose)
    axis: Vector3 = (1.0, 0.0, 0.0)
    limits: Optional[Limits] = None
    mimic: Optional[Mimic] = None


@dataclass(frozen=True)
class SourceDocument:
    """A parsed robot: links and joints keyed by name, in document order."""
    name: str
    links: Dict[str, LinkNode]
    joints: Dict[str, JointNode]

    def parent_joint_of(self, link: LinkNode) -> Optional[JointNode]:
        if link.parent_joint is None:
            return None
        return self.joints.get(link.parent_joint)
