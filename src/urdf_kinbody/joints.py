"""Translation of URDF joints into JointRecords."""

import logging
from typing import Tuple

import jax.numpy as jnp

from urdf_kinbody.core.document import JointNode, JointType
from urdf_kinbody.core.errors import LoadError
from urdf_kinbody.core.records import BodyJointType, JointRecord
from urdf_kinbody.transforms import se3, so3

logger = logging.getLogger(__name__)

# URDF fixed joints become locked hinges
_JOINT_TYPES = {
    JointType.REVOLUTE: (BodyJointType.REVOLUTE, True),
    JointType.PRISMATIC: (BodyJointType.SLIDER, True),
    JointType.FIXED: (BodyJointType.HINGE, False),
    JointType.CONTINUOUS: (BodyJointType.HINGE, True),
}

# Axis given to locked joints; any unit vector would do
DISABLED_AXIS = (1.0, 0.0, 0.0)


def joint_type_to_body_type(joint_type: JointType) -> Tuple[BodyJointType, bool]:
    """Map a URDF joint type to a body joint type and an active flag.

    Raises:
        LoadError: For planar, floating and unknown joints.
    """
    try:
        return _JOINT_TYPES[joint_type]
    except KeyError:
        logger.error("Unable to determine joint type [%s]", joint_type)
        raise LoadError(f"Unsupported joint type {joint_type}") from None


def translate_joint(joint: JointNode) -> JointRecord:
    """Convert one URDF joint into a JointRecord.

    The anchor is the joint origin. Active joints get their URDF axis rotated
    into the parent link frame; locked joints get a fixed placeholder axis.
    Explicit limits are copied; a locked joint without limits is pinned at
    zero, and an active joint without limits is left unbounded.

    Mimic tags are not translated.
    """
    body_type, is_active = joint_type_to_body_type(joint.type)

    origin = joint.origin.matrix
    if is_active:
        axis = so3.apply(se3.get_rotation(origin), jnp.asarray(joint.axis, dtype=jnp.float64))
    else:
        axis = jnp.asarray(DISABLED_AXIS, dtype=jnp.float64)

    record = JointRecord(
        name=joint.name,
        type=body_type,
        is_active=is_active,
        parent_link=joint.parent_link,
        child_link=joint.child_link,
        anchor=se3.get_position(origin),
        axis=axis,
    )

    limits = joint.limits
    if limits is not None:
        record = record.replace(
            lower=limits.lower,
            upper=limits.upper,
            max_velocity=limits.velocity,
            max_effort=limits.effort,
        )
    elif not is_active:
        record = record.replace(lower=0.0, upper=0.0)

    if joint.mimic is not None:
        logger.debug("Joint[%s]: ignoring mimic of [%s]", joint.name, joint.mimic.joint)

    return record
