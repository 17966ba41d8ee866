"""Translation of URDF links into LinkRecords."""

import logging

import jax.numpy as jnp

from urdf_kinbody.core.document import LinkNode, SourceDocument
from urdf_kinbody.core.records import LinkRecord
from urdf_kinbody.geometry import GeometryRole, translate_geometry
from urdf_kinbody.host import BodyEnvironment
from urdf_kinbody.io.uri import URIResolver

logger = logging.getLogger(__name__)


def translate_link(link: LinkNode, document: SourceDocument, env: BodyEnvironment,
                   resolver: URIResolver) -> LinkRecord:
    """Convert one URDF link into a LinkRecord.

    The link frame is the origin of the joint it hangs from, or identity for
    a root link. Only the principal moments of inertia are carried over;
    products of inertia (ixy, ixz, iyz) are dropped.

    The render geometry is placed at the collision origin when the link has
    a collision block, and at the visual origin only when it has none. URDF
    files produced alongside this convention keep both origins equal.

    Args:
        link: Link to convert.
        document: Document the link belongs to, used to look up its parent joint.
        env: Host used to load collision meshes.
        resolver: Resolver for mesh URIs.

    Returns:
        LinkRecord with zero, one or two geometries (collision first).
    """
    record = LinkRecord(name=link.name)

    parent_joint = document.parent_joint_of(link)
    if parent_joint is not None:
        record = record.replace(transform=parent_joint.origin.matrix)

    inertial = link.inertial
    if inertial is not None:
        record = record.replace(
            mass=inertial.mass,
            mass_frame=inertial.origin.matrix,
            inertia_moments=jnp.array([inertial.ixx, inertial.iyy, inertial.izz]),
        )

    geometries = []
    collision = link.collision
    if collision is not None:
        geometries.append(
            translate_geometry(collision.geometry, GeometryRole.COLLISION, collision.origin.matrix,
                               env, resolver, link_name=link.name)
        )

    visual = link.visual
    if visual is not None:
        origin = collision.origin if collision is not None else visual.origin
        geometries.append(
            translate_geometry(visual.geometry, GeometryRole.RENDER, origin.matrix,
                               env, resolver, visual.material, link.name)
        )

    if not geometries:
        logger.debug("Link[%s] has no geometry", link.name)

    return record.replace(geometries=tuple(geometries))
