"""URDF parser producing a SourceDocument.

The parser reads every link and joint into name-keyed tables first and only
then links children to their parent joints, so elements may appear in any
order in the file.
"""

import logging
from typing import Dict, Sequence, Tuple

from lxml import etree

from urdf_kinbody.core.document import (
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
from urdf_kinbody.core.errors import LoadError

logger = logging.getLogger(__name__)


def parse_urdf(urdf_path: str) -> SourceDocument:
    """Parse a URDF file.

    Args:
        urdf_path: Path to the URDF file to load.

    Returns:
        SourceDocument with every link and joint of the robot.

    Raises:
        LoadError: If the file cannot be read or is not a valid URDF.
    """
    try:
        tree = etree.parse(urdf_path)
    except (OSError, etree.XMLSyntaxError) as e:
        logger.error("Unable to open URDF file [%s]: %s", urdf_path, e)
        raise LoadError(f"Failed to open URDF file {urdf_path!r}") from e
    return _parse_robot(tree.getroot())


def parse_urdf_string(text: str) -> SourceDocument:
    """Parse URDF XML held in a string."""
    try:
        root = etree.fromstring(text.encode())
    except etree.XMLSyntaxError as e:
        logger.error("Unable to parse URDF: %s", e)
        raise LoadError("Failed to parse URDF") from e
    return _parse_robot(root)


def _parse_robot(root) -> SourceDocument:
    if root.tag != "robot":
        raise LoadError(f"Expected a <robot> root element, found <{root.tag}>")

    # Robot-level materials can be referenced by name from visuals
    materials: Dict[str, Material] = {}
    for material_elem in root.findall("material"):
        material = _parse_material(material_elem, {})
        materials[material.name] = material

    # First pass: read all links and joints into name tables
    links: Dict[str, LinkNode] = {}
    for link_elem in root.findall("link"):
        link = _parse_link(link_elem, materials)
        if link.name in links:
            raise LoadError(f"Duplicate link name {link.name!r}")
        links[link.name] = link

    joints: Dict[str, JointNode] = {}
    for joint_elem in root.findall("joint"):
        joint = _parse_joint(joint_elem)
        if joint.name in joints:
            raise LoadError(f"Duplicate joint name {joint.name!r}")
        joints[joint.name] = joint

    # Second pass: tell each child link which joint it hangs from
    for joint in joints.values():
        child = links.get(joint.child_link)
        if child is None:
            continue
        if child.parent_joint is not None:
            raise LoadError(
                f"Link {child.name!r} is the child of both {child.parent_joint!r} and {joint.name!r}"
            )
        links[child.name] = LinkNode(
            name=child.name,
            parent_joint=joint.name,
            inertial=child.inertial,
            collision=child.collision,
            visual=child.visual,
        )

    return SourceDocument(name=root.get("name", ""), links=links, joints=joints)


def _parse_link(link_elem, materials: Dict[str, Material]) -> LinkNode:
    name = _required(link_elem, "name")

    inertial = None
    inertial_elem = link_elem.find("inertial")
    if inertial_elem is not None:
        inertial = _parse_inertial(inertial_elem)

    collision = None
    collision_elem = link_elem.find("collision")
    if collision_elem is not None:
        collision = Collision(
            geometry=_parse_geometry(collision_elem, name),
            origin=_parse_origin(collision_elem.find("origin")),
        )

    visual = None
    visual_elem = link_elem.find("visual")
    if visual_elem is not None:
        material = None
        material_elem = visual_elem.find("material")
        if material_elem is not None:
            material = _parse_material(material_elem, materials)
        visual = Visual(
            geometry=_parse_geometry(visual_elem, name),
            origin=_parse_origin(visual_elem.find("origin")),
            material=material,
        )

    return LinkNode(name=name, inertial=inertial, collision=collision, visual=visual)


def _parse_inertial(inertial_elem) -> Inertial:
    mass = 0.0
    mass_elem = inertial_elem.find("mass")
    if mass_elem is not None:
        mass = _float(mass_elem.get("value", "0"))

    moments = {}
    inertia_elem = inertial_elem.find("inertia")
    for key in ("ixx", "ixy", "ixz", "iyy", "iyz", "izz"):
        value = inertia_elem.get(key, "0") if inertia_elem is not None else "0"
        moments[key] = _float(value)

    return Inertial(mass=mass, origin=_parse_origin(inertial_elem.find("origin")), **moments)


def _parse_geometry(parent_elem, link_name: str) -> Geometry:
    geometry_elem = parent_elem.find("geometry")
    if geometry_elem is None or len(geometry_elem) == 0:
        raise LoadError(f"Link {link_name!r} has a <{parent_elem.tag}> without geometry")

    # lxml yields comments as children too; take the first real element
    shape_elem = next((child for child in geometry_elem if isinstance(child.tag, str)), None)
    if shape_elem is None:
        raise LoadError(f"Link {link_name!r} has a <{parent_elem.tag}> without geometry")

    if shape_elem.tag == "sphere":
        return Sphere(radius=_float(_required(shape_elem, "radius")))
    elif shape_elem.tag == "box":
        return Box(size=_vector3(_required(shape_elem, "size")))
    elif shape_elem.tag == "cylinder":
        return Cylinder(
            radius=_float(_required(shape_elem, "radius")),
            length=_float(_required(shape_elem, "length")),
        )
    elif shape_elem.tag == "mesh":
        scale = shape_elem.get("scale")
        return Mesh(
            filename=_required(shape_elem, "filename"),
            scale=_vector3(scale) if scale is not None else (1.0, 1.0, 1.0),
        )
    return UnknownGeometry(tag=shape_elem.tag)


def _parse_material(material_elem, materials: Dict[str, Material]) -> Material:
    name = material_elem.get("name", "")
    color_elem = material_elem.find("color")
    if color_elem is not None:
        rgba = _floats(_required(color_elem, "rgba"), 4)
        return Material(name=name, color=rgba)
    # Bare reference to a robot-level material
    return materials.get(name, Material(name=name))


def _parse_joint(joint_elem) -> JointNode:
    name = _required(joint_elem, "name")
    joint_type = JointType.from_urdf(joint_elem.get("type"))

    parent_elem = joint_elem.find("parent")
    child_elem = joint_elem.find("child")
    if parent_elem is None or child_elem is None:
        raise LoadError(f"Joint {name!r} is missing its parent or child element")

    axis = (1.0, 0.0, 0.0)
    axis_elem = joint_elem.find("axis")
    if axis_elem is not None:
        axis = _vector3(axis_elem.get("xyz", "1 0 0"))

    limits = None
    limit_elem = joint_elem.find("limit")
    if limit_elem is not None:
        limits = Limits(
            lower=_float(limit_elem.get("lower", "0")),
            upper=_float(limit_elem.get("upper", "0")),
            velocity=_float(limit_elem.get("velocity", "0")),
            effort=_float(limit_elem.get("effort", "0")),
        )

    mimic = None
    mimic_elem = joint_elem.find("mimic")
    if mimic_elem is not None:
        mimic = Mimic(
            joint=_required(mimic_elem, "joint"),
            multiplier=_float(mimic_elem.get("multiplier", "1")),
            offset=_float(mimic_elem.get("offset", "0")),
        )

    return JointNode(
        name=name,
        type=joint_type,
        parent_link=_required(parent_elem, "link"),
        child_link=_required(child_elem, "link"),
        origin=_parse_origin(joint_elem.find("origin")),
        axis=axis,
        limits=limits,
        mimic=mimic,
    )


def _parse_origin(origin_elem) -> Pose:
    if origin_elem is None:
        return Pose()
    return Pose(
        xyz=_vector3(origin_elem.get("xyz", "0 0 0")),
        rpy=_vector3(origin_elem.get("rpy", "0 0 0")),
    )


def _required(elem, attribute: str) -> str:
    value = elem.get(attribute)
    if value is None:
        raise LoadError(f"<{elem.tag}> element is missing the {attribute!r} attribute")
    return value


def _float(text: str) -> float:
    try:
        return float(text)
    except ValueError as e:
        raise LoadError(f"Expected a number, got {text!r}") from e


def _floats(text: str, count: int) -> Tuple[float, ...]:
    parts: Sequence[str] = text.split()
    if len(parts) != count:
        raise LoadError(f"Expected {count} numbers, got {text!r}")
    return tuple(_float(part) for part in parts)


def _vector3(text: str) -> Tuple[float, float, float]:
    return _floats(text, 3)  # type: ignore[return-value]
