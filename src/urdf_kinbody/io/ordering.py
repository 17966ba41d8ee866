"""Joint ordering from an optional YAML side file.

The side file is a mapping with a `joints` key assigning target indices to
joint names, for example::

    joints:
      shoulder: 0
      elbow: 1
    adjacent:
      - [upper_arm, forearm]

`adjacent` is read but not used by the loader.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

import yaml

from urdf_kinbody.core.document import JointNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JointConfig:
    joints: Dict[str, int] = field(default_factory=dict)
    adjacent: List[Tuple[str, str]] = field(default_factory=list)


def read_joint_config(config_path: Optional[str]) -> Optional[JointConfig]:
    """Read the joint ordering side file.

    Args:
        config_path: Path to the YAML file, or None.

    Returns:
        The parsed config, or None if there is no usable file. A missing
        `joints` key gives a config with an empty mapping.
    """
    if not config_path:
        return None

    try:
        with open(config_path) as f:
            doc = yaml.safe_load(f)
    except OSError as e:
        logger.debug("No joint config at %s (%s), using natural joint order", config_path, e)
        return None
    except yaml.YAMLError as e:
        logger.warning("Unable to parse joint config %s: %s", config_path, e)
        return None

    if not isinstance(doc, dict):
        logger.warning("Joint config %s is not a mapping, ignoring it", config_path)
        return None

    entries = doc.get("joints") or {}
    if not isinstance(entries, dict):
        logger.warning("Joint config %s: `joints` is not a mapping, ignoring it", config_path)
        entries = {}

    joints = {}
    for name, index in entries.items():
        if isinstance(index, bool) or not isinstance(index, int):
            logger.warning("Joint config %s: index of joint [%s] is not an integer: %r",
                           config_path, name, index)
            continue
        joints[str(name)] = index

    pairs = doc.get("adjacent") or []
    if not isinstance(pairs, list):
        logger.warning("Joint config %s: `adjacent` is not a list, ignoring it", config_path)
        pairs = []

    adjacent = [
        tuple(pair) for pair in pairs
        if isinstance(pair, (list, tuple)) and len(pair) == 2
    ]
    return JointConfig(joints=joints, adjacent=adjacent)


def order_joints(joints: Mapping[str, JointNode],
                 ordering: Optional[Mapping[str, int]] = None) -> List[JointNode]:
    """Produce the joint sequence used to build the body.

    Without an ordering, joints come out in mapping order. With one, joints
    that have an index are placed at it, and every other joint follows after
    the indexed block in mapping order. Slots that no model joint claims are
    dropped. A joint whose index is out of range or already taken is appended
    with the unindexed joints instead, so every joint appears exactly once.

    Args:
        joints: Joint name to JointNode.
        ordering: Joint name to target index, possibly partial.

    Returns:
        All joints, each exactly once.
    """
    if ordering is None:
        return list(joints.values())

    slots: List[Optional[JointNode]] = [None] * len(ordering)
    tail: List[JointNode] = []

    for name, joint in joints.items():
        index = ordering.get(name)
        if index is None:
            tail.append(joint)
        elif not 0 <= index < len(slots) or slots[index] is not None:
            logger.warning("Joint [%s] has unusable index %d, appending it", name, index)
            tail.append(joint)
        else:
            slots[index] = joint

    logger.debug("Ordered %d joints by index, %d appended",
                 sum(slot is not None for slot in slots), len(tail))
    return [joint for joint in slots if joint is not None] + tail

