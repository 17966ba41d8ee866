"""I/O utilities for reading robot descriptions.

This module provides the URDF parser, the resolver for `file://` and
`package://` resource URIs, and the YAML joint ordering side file reader.
"""

from .ordering import JointConfig, order_joints, read_joint_config
from .urdf_parser import parse_urdf, parse_urdf_string
from .uri import PackageCache, URIResolver, find_package

__all__ = [
    "JointConfig",
    "order_joints",
    "read_joint_config",
    "parse_urdf",
    "parse_urdf_string",
    "PackageCache",
    "URIResolver",
    "find_package",
]
