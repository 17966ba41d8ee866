"""Loading a URDF into a host environment as one articulated body.

This module ties the pieces together: parse the URDF, read the optional
joint ordering file, translate every link and joint, and only then ask the
host to build, name and register the body. A failure at any step before the
host call leaves the environment untouched.
"""

import logging
from typing import Any, List, Mapping, Optional, Tuple

from urdf_kinbody.core.document import SourceDocument
from urdf_kinbody.core.records import JointRecord, LinkRecord
from urdf_kinbody.host import BodyEnvironment
from urdf_kinbody.io.ordering import order_joints, read_joint_config
from urdf_kinbody.io.urdf_parser import parse_urdf
from urdf_kinbody.io.uri import URIResolver
from urdf_kinbody.joints import translate_joint
from urdf_kinbody.links import translate_link

logger = logging.getLogger(__name__)

DEFAULT_BODY_NAME = "urdf"


def translate_document(
    document: SourceDocument,
    env: BodyEnvironment,
    ordering: Optional[Mapping[str, int]] = None,
    resolver: Optional[URIResolver] = None,
) -> Tuple[List[LinkRecord], List[JointRecord]]:
    """Translate a parsed document into body records.

    Links come out in document order, joints in the order given by
    `ordering` (see `urdf_kinbody.io.ordering.order_joints`).

    Args:
        document: Parsed URDF.
        env: Host used to load collision meshes.
        ordering: Optional joint name to index mapping.
        resolver: Resolver for mesh URIs. A fresh one is created if omitted.

    Returns:
        Tuple of (link records, joint records).

    Raises:
        LoadError: On an unsupported joint type or collision geometry.
    """
    if resolver is None:
        resolver = URIResolver()

    links = [translate_link(link, document, env, resolver) for link in document.links.values()]
    joints = [translate_joint(joint) for joint in order_joints(document.joints, ordering)]
    return links, joints


def load_urdf(
    env: BodyEnvironment,
    urdf_path: str,
    config_path: Optional[str] = None,
    *,
    name: str = DEFAULT_BODY_NAME,
    resolver: Optional[URIResolver] = None,
) -> Any:
    """Load a URDF file into `env` as a single registered body.

    Args:
        env: Host environment that receives the body.
        urdf_path: Path to the URDF file.
        config_path: Optional YAML side file with a `joints` index mapping.
        name: Name given to the body.
        resolver: Resolver for mesh URIs, e.g. one sharing a package cache
                  across loads. A fresh one is created if omitted.

    Returns:
        The host's handle for the new body.

    Raises:
        LoadError: If the URDF cannot be parsed or translated, or the host
                   rejects the records. Nothing is registered in that case.
    """
    document = parse_urdf(urdf_path)

    config = read_joint_config(config_path)
    ordering = None
    if config is not None:
        ordering = config.joints
        if config.adjacent:
            logger.debug("Ignoring %d link adjacency hints in %s", len(config.adjacent), config_path)

    links, joints = translate_document(document, env, ordering, resolver)

    handle = env.construct_body(links, joints)
    env.set_name(handle, name)
    env.register(handle)

    logger.info("Loaded %s as '%s': %d links, %d joints", urdf_path, name, len(links), len(joints))
    return handle
