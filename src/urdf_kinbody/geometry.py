"""Translation of URDF geometry into body geometry records.

A URDF link carries one collision and one visual geometry. Collision shapes
map onto body primitives directly. Visual geometry is only supported as a
mesh, and is carried by a zero-radius sphere whose render file is the mesh:
every body geometry needs a real primitive type, and the degenerate sphere
adds nothing to collision checking.
"""

import logging
from enum import Enum
from typing import Optional

import jax.numpy as jnp
from jax import Array

from urdf_kinbody.core.document import (
    Box,
    Cylinder,
    Geometry,
    Material,
    Mesh,
    Sphere,
)
from urdf_kinbody.core.errors import LoadError
from urdf_kinbody.core.records import GeometryRecord, GeometryType
from urdf_kinbody.host import BodyEnvironment
from urdf_kinbody.io.uri import URIResolver

logger = logging.getLogger(__name__)


class GeometryRole(Enum):
    COLLISION = "collision"
    RENDER = "render"


def collision_geometry(geometry: Geometry, transform: Array, env: BodyEnvironment,
                       resolver: URIResolver, link_name: str = "") -> GeometryRecord:
    """Build the collision record for one URDF collision geometry.

    Args:
        geometry: Parsed URDF geometry.
        transform: (4, 4) pose of the geometry in the link frame.
        env: Host used to load collision meshes.
        resolver: Resolver for mesh URIs.
        link_name: Owning link, for log messages.

    Returns:
        An invisible, non-modifiable GeometryRecord.

    Raises:
        LoadError: If the geometry type has no body equivalent.
    """
    record = GeometryRecord(
        type=GeometryType.SPHERE,
        transform=transform,
        geom_data=jnp.zeros(3),
        visible=False,
        modifiable=False,
    )

    if isinstance(geometry, Sphere):
        return record.replace(geom_data=geometry.radius * jnp.ones(3))
    elif isinstance(geometry, Box):
        return record.replace(type=GeometryType.BOX, geom_data=0.5 * jnp.asarray(geometry.size))
    elif isinstance(geometry, Cylinder):
        return record.replace(
            type=GeometryType.CYLINDER,
            geom_data=jnp.array([geometry.radius, geometry.length, 0.0]),
        )
    elif isinstance(geometry, Mesh):
        record = record.replace(type=GeometryType.TRIMESH)
        filename = resolver.resolve(geometry.filename)
        if not filename:
            logger.warning("Link[%s]: Unresolved collision mesh %s", link_name, geometry.filename)
            return record

        try:
            mesh = env.load_trimesh(filename)
        except Exception as e:
            logger.warning("Link[%s]: Mesh loader raised for %s: %s", link_name, filename, e)
            mesh = None
        if mesh is None:
            logger.warning("Link[%s]: Failed loading collision mesh %s", link_name, filename)
        return record.replace(collision_filename=filename, collision_mesh=mesh)

    logger.error("Link[%s]: Unable to determine geometry type [%s]", link_name, _tag(geometry))
    raise LoadError(f"Failed to convert collision geometry of link {link_name!r}")


def render_geometry(geometry: Geometry, transform: Array, resolver: URIResolver,
                    material: Optional[Material] = None, link_name: str = "") -> GeometryRecord:
    """Build the render record for one URDF visual geometry.

    The record is always a visible zero-radius sphere. A mesh visual sets its
    render file; any other visual geometry is skipped with a warning and the
    sphere carries no render file.

    Args:
        geometry: Parsed URDF geometry.
        transform: (4, 4) pose of the geometry in the link frame.
        resolver: Resolver for mesh URIs.
        material: Visual material; its color becomes the diffuse and
                  ambient color.
        link_name: Owning link, for log messages.

    Returns:
        A visible, non-modifiable sphere GeometryRecord.
    """
    record = GeometryRecord(
        type=GeometryType.SPHERE,
        transform=transform,
        geom_data=jnp.zeros(3),
        visible=True,
        modifiable=False,
    )

    if isinstance(geometry, Mesh):
        filename = resolver.resolve(geometry.filename)
        record = record.replace(
            render_filename=filename or None,
            render_scale=jnp.ones(3),
        )
    else:
        logger.warning("Link[%s]: Only trimeshes are supported for visual geometry, got [%s]",
                       link_name, _tag(geometry))

    if material is not None and material.color is not None:
        color = jnp.asarray(material.color)
        record = record.replace(diffuse_color=color, ambient_color=color)

    return record


def translate_geometry(geometry: Geometry, role: GeometryRole, transform: Array,
                       env: BodyEnvironment, resolver: URIResolver,
                       material: Optional[Material] = None,
                       link_name: str = "") -> GeometryRecord:
    """Dispatch to collision_geometry or render_geometry by role."""
    if role is GeometryRole.COLLISION:
        return collision_geometry(geometry, transform, env, resolver, link_name)
    return render_geometry(geometry, transform, resolver, material, link_name)


def _tag(geometry) -> str:
    return getattr(geometry, "tag", type(geometry).__name__)
