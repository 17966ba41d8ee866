"""Tests for collision and render geometry translation."""

import logging

import jax.numpy as jnp
import numpy as np
import pytest

from urdf_kinbody.core import (
    Box,
    Cylinder,
    GeometryType,
    LoadError,
    Material,
    Mesh,
    Sphere,
    TriMesh,
    UnknownGeometry,
)
from urdf_kinbody.geometry import (
    GeometryRole,
    collision_geometry,
    render_geometry,
    translate_geometry,
)
from urdf_kinbody.host import InMemoryEnvironment
from urdf_kinbody.io.uri import URIResolver
from urdf_kinbody.transforms import se3

from conftest import PACKAGES


class MeshServiceEnvironment(InMemoryEnvironment):
    """In-memory host whose mesh loader returns a canned result."""

    def __init__(self, mesh=None):
        super().__init__()
        self.mesh = mesh
        self.requested = []

    def load_trimesh(self, path):
        self.requested.append(path)
        return self.mesh


@pytest.fixture
def pose():
    return se3.from_xyz_rpy(jnp.array([0.1, 0.2, 0.3]), jnp.array([0.0, 0.0, 0.5]))


def test_collision_sphere(pose, env, fake_resolver):
    record = collision_geometry(Sphere(radius=0.3), pose, env, fake_resolver)
    assert record.type == GeometryType.SPHERE
    np.testing.assert_allclose(record.geom_data, [0.3, 0.3, 0.3])
    np.testing.assert_array_equal(record.transform, pose)
    assert not record.visible
    assert not record.modifiable


def test_collision_box_uses_half_extents(pose, env, fake_resolver):
    record = collision_geometry(Box(size=(0.2, 0.4, 1.0)), pose, env, fake_resolver)
    assert record.type == GeometryType.BOX
    np.testing.assert_allclose(record.geom_data, [0.1, 0.2, 0.5])


def test_collision_cylinder(pose, env, fake_resolver):
    record = collision_geometry(Cylinder(radius=0.05, length=0.5), pose, env, fake_resolver)
    assert record.type == GeometryType.CYLINDER
    np.testing.assert_allclose(record.geom_data, [0.05, 0.5, 0.0])


def test_collision_mesh_loads_through_host(pose, fake_resolver):
    mesh = TriMesh(vertices=jnp.zeros((3, 3)), indices=jnp.array([[0, 1, 2]]))
    env = MeshServiceEnvironment(mesh)

    record = collision_geometry(Mesh("package://foo/meshes/x.stl"), pose, env, fake_resolver)

    assert record.type == GeometryType.TRIMESH
    assert record.collision_filename == "/opt/foo/meshes/x.stl"
    assert record.collision_mesh is mesh
    assert env.requested == ["/opt/foo/meshes/x.stl"]
    assert not record.visible
    assert not record.modifiable


def test_collision_mesh_load_failure_is_soft(pose, fake_resolver, caplog):
    env = MeshServiceEnvironment(None)
    with caplog.at_level(logging.WARNING, logger="urdf_kinbody.geometry"):
        record = collision_geometry(Mesh("file:///missing.stl"), pose, env, fake_resolver, "arm")

    assert record.type == GeometryType.TRIMESH
    assert record.collision_filename == "/missing.stl"
    assert record.collision_mesh is None
    assert "Failed loading collision mesh" in caplog.text


def test_collision_mesh_unresolved_skips_host(pose, fake_resolver, caplog):
    env = MeshServiceEnvironment(None)
    with caplog.at_level(logging.WARNING):
        record = collision_geometry(Mesh("package://nowhere/x.stl"), pose, env, fake_resolver)

    assert record.collision_filename is None
    assert record.collision_mesh is None
    assert env.requested == []


def test_collision_mesh_from_real_file(pose, env):
    resolver = URIResolver(lookup=lambda name: str(PACKAGES / name))
    record = collision_geometry(
        Mesh("package://arm_description/meshes/cube.obj"), pose, env, resolver
    )
    assert record.collision_mesh is not None
    assert record.collision_mesh.indices.shape == (12, 3)
    assert record.collision_mesh.vertices.shape[1] == 3


def test_collision_unknown_geometry_is_fatal(pose, env, fake_resolver, caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(LoadError):
            collision_geometry(UnknownGeometry("capsule"), pose, env, fake_resolver, "arm")
    assert "capsule" in caplog.text


def test_render_mesh_is_zero_sphere(pose, fake_resolver):
    record = render_geometry(Mesh("package://foo/meshes/arm.dae"), pose, fake_resolver)

    assert record.type == GeometryType.SPHERE
    np.testing.assert_array_equal(record.geom_data, jnp.zeros(3))
    assert record.render_filename == "/opt/foo/meshes/arm.dae"
    np.testing.assert_array_equal(record.render_scale, jnp.ones(3))
    assert record.visible
    assert not record.modifiable
    assert record.collision_filename is None


def test_render_material_sets_both_colors(pose, fake_resolver):
    material = Material(name="red", color=(1.0, 0.0, 0.0, 0.5))
    record = render_geometry(Mesh("file:///x.dae"), pose, fake_resolver, material)
    np.testing.assert_allclose(record.diffuse_color, [1.0, 0.0, 0.0, 0.5])
    np.testing.assert_allclose(record.ambient_color, [1.0, 0.0, 0.0, 0.5])


def test_render_material_without_color(pose, fake_resolver):
    record = render_geometry(Mesh("file:///x.dae"), pose, fake_resolver, Material(name="plain"))
    assert record.diffuse_color is None
    assert record.ambient_color is None


@pytest.mark.parametrize("geometry", [
    Sphere(radius=1.0),
    Box(size=(1.0, 1.0, 1.0)),
    Cylinder(radius=1.0, length=1.0),
    UnknownGeometry("capsule"),
])
def test_render_non_mesh_is_soft(geometry, pose, fake_resolver, caplog):
    with caplog.at_level(logging.WARNING, logger="urdf_kinbody.geometry"):
        record = render_geometry(geometry, pose, fake_resolver, link_name="arm")

    assert "Only trimeshes are supported" in caplog.text
    assert record.type == GeometryType.SPHERE
    assert record.render_filename is None
    np.testing.assert_array_equal(record.geom_data, jnp.zeros(3))


def test_render_unresolved_mesh_has_no_filename(pose, fake_resolver):
    record = render_geometry(Mesh("package://nowhere/x.dae"), pose, fake_resolver)
    assert record.render_filename is None


def test_translate_geometry_dispatches_on_role(pose, env, fake_resolver):
    collision = translate_geometry(Mesh("file:///x.stl"), GeometryRole.COLLISION, pose, env, fake_resolver)
    render = translate_geometry(Mesh("file:///x.stl"), GeometryRole.RENDER, pose, env, fake_resolver)
    assert collision.type == GeometryType.TRIMESH
    assert render.type == GeometryType.SPHERE
    assert render.render_filename == "/x.stl"


class BrokenMeshEnvironment(InMemoryEnvironment):
    """Host whose mesh loader raises instead of returning None."""

    def load_trimesh(self, path):
        raise RuntimeError("mesh service unavailable")


def test_collision_mesh_loader_error_is_soft(pose, fake_resolver, caplog):
    with caplog.at_level(logging.WARNING, logger="urdf_kinbody.geometry"):
        record = collision_geometry(
            Mesh("package://foo/meshes/x.stl"), pose, BrokenMeshEnvironment(), fake_resolver, "forearm"
        )

    assert record.type == GeometryType.TRIMESH
    assert record.collision_filename == "/opt/foo/meshes/x.stl"
    assert record.collision_mesh is None
    assert "Failed loading collision mesh" in caplog.text
