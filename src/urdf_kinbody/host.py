"""Host environment interface.

The loader never stores bodies itself. It builds link and joint records and
hands them to a BodyEnvironment, which owns them from then on. The host also
supplies triangle mesh loading for collision geometry.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

import jax.numpy as jnp
import trimesh
from flax import struct

from urdf_kinbody.core.errors import LoadError
from urdf_kinbody.core.records import JointRecord, LinkRecord, TriMesh

logger = logging.getLogger(__name__)


class BodyEnvironment(ABC):
    """What the loader needs from a simulation environment."""

    @abstractmethod
    def construct_body(self, links: Sequence[LinkRecord], joints: Sequence[JointRecord]) -> Any:
        """Build a body from complete link and joint lists and return a handle."""

    @abstractmethod
    def set_name(self, handle: Any, name: str) -> None:
        """Name a body built by construct_body."""

    @abstractmethod
    def register(self, handle: Any) -> None:
        """Add a body to the active scene."""

    @abstractmethod
    def load_trimesh(self, path: str) -> Optional[TriMesh]:
        """Read triangle data from a mesh file, or return None on failure."""


@struct.dataclass
class KinBody:
    """An articulated body as stored by InMemoryEnvironment.

    Attributes:
        name: Body name, empty until set_name is called.
        links: Link records, indexed by link ID.
        joints: Joint records, indexed by joint ID.
    """
    links: Tuple[LinkRecord, ...]
    joints: Tuple[JointRecord, ...]
    name: str = struct.field(pytree_node=False, default="")

    @property
    def link_names(self) -> Tuple[str, ...]:
        return tuple(link.name for link in self.links)

    @property
    def joint_names(self) -> Tuple[str, ...]:
        return tuple(joint.name for joint in self.joints)

    def link(self, name: str) -> LinkRecord:
        try:
            return self.links[self.link_names.index(name)]
        except ValueError:
            raise ValueError(f"Link '{name}' not found in body '{self.name}'")

    def joint(self, name: str) -> JointRecord:
        try:
            return self.joints[self.joint_names.index(name)]
        except ValueError:
            raise ValueError(f"Joint '{name}' not found in body '{self.name}'")


class InMemoryEnvironment(BodyEnvironment):
    """A host that keeps registered bodies in a list.

    Useful on its own for inspecting what a URDF turns into, and as the
    reference host in tests.
    """

    def __init__(self):
        self.bodies: List[KinBody] = []
        self._constructed: Dict[int, KinBody] = {}

    def construct_body(self, links: Sequence[LinkRecord], joints: Sequence[JointRecord]) -> int:
        link_names = set()
        for link in links:
            if link.name in link_names:
                raise LoadError(f"Duplicate link name {link.name!r}")
            link_names.add(link.name)

        for joint in joints:
            for link_name in (joint.parent_link, joint.child_link):
                if link_name not in link_names:
                    raise LoadError(
                        f"Joint {joint.name!r} references unknown link {link_name!r}"
                    )

        handle = len(self._constructed)
        self._constructed[handle] = KinBody(links=tuple(links), joints=tuple(joints))
        return handle

    def body(self, handle: int) -> KinBody:
        return self._constructed[handle]

    def set_name(self, handle: int, name: str) -> None:
        self._constructed[handle] = self._constructed[handle].replace(name=name)

    def register(self, handle: int) -> None:
        self.bodies.append(self._constructed[handle])

    def load_trimesh(self, path: str) -> Optional[TriMesh]:
        if not os.path.isfile(path):
            return None
        try:
            mesh = trimesh.load(path, force="mesh")
        except Exception as e:
            # trimesh readers raise format-specific errors on corrupt files
            logger.warning("trimesh could not read %s: %s", path, e)
            return None

        if not isinstance(mesh, trimesh.Trimesh) or len(mesh.faces) == 0:
            return None
        return TriMesh(
            vertices=jnp.asarray(mesh.vertices, dtype=jnp.float64),
            indices=jnp.asarray(mesh.faces, dtype=jnp.int32),
        )
