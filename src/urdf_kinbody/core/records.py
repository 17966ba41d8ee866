"""Body records handed to the host environment.

A URDF is flattened into a sequence of LinkRecord and JointRecord PyTrees.
Names, enum tags, flags and filenames are static fields; frames, vectors and
mesh data are JAX arrays so a finished body can pass through jax.tree_util
and jit like any other PyTree.
"""

from enum import Enum
from typing import Optional, Tuple

import jax.numpy as jnp
from jax import Array
from flax import struct

from urdf_kinbody.transforms import se3


class GeometryType(Enum):
    SPHERE = "sphere"
    BOX = "box"
    CYLINDER = "cylinder"
    TRIMESH = "trimesh"


class BodyJointType(Enum):
    REVOLUTE = "revolute"
    SLIDER = "slider"
    HINGE = "hinge"


@struct.dataclass
class TriMesh:
    """Triangle mesh data.

    Attributes:
        vertices: Array of shape (num_vertices, 3).
        indices: Integer array of shape (num_triangles, 3) into `vertices`.
    """
    vertices: Array
    indices: Array


@struct.dataclass
class GeometryRecord:
    """One collision or render shape attached to a link.

    Attributes:
        type: Primitive type of the shape.
        transform: (4, 4) pose of the shape in the link frame.
        geom_data: (3,) shape parameters. Sphere: radius on every axis.
                   Box: half extents. Cylinder: (radius, length, 0).
                   Trimesh: unused, zeros.
        visible: Whether the host should draw this shape.
        modifiable: Whether the host may edit this shape after loading.
        collision_filename: Resolved path of the collision mesh, if any.
        collision_mesh: Triangle data loaded from `collision_filename`.
        render_filename: Resolved path of the render mesh, if any.
        render_scale: (3,) scale applied to the render mesh.
        diffuse_color: (4,) RGBA diffuse color, if a material set one.
        ambient_color: (4,) RGBA ambient color, if a material set one.
    """
    type: GeometryType = struct.field(pytree_node=False)
    transform: Array
    geom_data: Array
    visible: bool = struct.field(pytree_node=False, default=False)
    modifiable: bool = struct.field(pytree_node=False, default=False)
    collision_filename: Optional[str] = struct.field(pytree_node=False, default=None)
    collision_mesh: Optional[TriMesh] = None
    render_filename: Optional[str] = struct.field(pytree_node=False, default=None)
    render_scale: Optional[Array] = None
    diffuse_color: Optional[Array] = None
    ambient_color: Optional[Array] = None


@struct.dataclass
class LinkRecord:
    """A rigid body segment.

    Attributes:
        name: Link name, unique within the body.
        transform: (4, 4) local transform, taken from the link's parent joint
                   origin. Identity for a link with no parent joint.
        mass: Link mass.
        mass_frame: (4, 4) pose of the center of mass and principal axes.
        inertia_moments: (3,) principal moments (ixx, iyy, izz). The body
                         model has no place for products of inertia.
        geometries: Collision and render shapes, in that order.
    """
    name: str = struct.field(pytree_node=False)
    transform: Array = struct.field(default_factory=se3.identity)
    mass: float = 0.0
    mass_frame: Array = struct.field(default_factory=se3.identity)
    inertia_moments: Array = struct.field(default_factory=lambda: jnp.zeros(3))
    geometries: Tuple[GeometryRecord, ...] = ()


@struct.dataclass
class JointMimic:
    """Linear coupling `value = multiplier * joint + offset`.

    Part of the record layout only; the loader never fills it in.
    """
    joint: str = struct.field(pytree_node=False)
    multiplier: float = 1.0
    offset: float = 0.0


@struct.dataclass
class JointRecord:
    """A single-axis joint between two links.

    Attributes:
        name: Joint name.
        type: Body joint type.
        is_active: False for joints that are locked in place (URDF fixed).
        parent_link: Name of the parent link.
        child_link: Name of the child link.
        anchor: (3,) point the axis passes through, in the parent link frame.
        axis: (3,) joint axis in the parent link frame.
        lower, upper: Position limits, or None when unbounded.
        max_velocity, max_effort: Velocity and effort limits, or None.
        mimic: Always None; see JointMimic.
    """
    name: str = struct.field(pytree_node=False)
    type: BodyJointType = struct.field(pytree_node=False)
    is_active: bool = struct.field(pytree_node=False)
    parent_link: str = struct.field(pytree_node=False)
    child_link: str = struct.field(pytree_node=False)
    anchor: Array
    axis: Array
    lower: Optional[float] = None
    upper: Optional[float] = None
    max_velocity: Optional[float] = None
    max_effort: Optional[float] = None
    mimic: Optional[JointMimic] = None
