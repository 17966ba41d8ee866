"""Tests for resource URI resolution."""

import logging

import pytest

from urdf_kinbody.io.uri import PackageCache, URIResolver, find_package

from conftest import PACKAGES


class CountingLookup:
    """Fake package service that records every query."""

    def __init__(self, paths):
        self.paths = paths
        self.calls = []

    def __call__(self, name):
        self.calls.append(name)
        return self.paths.get(name, "")


def test_file_uri():
    resolver = URIResolver(lookup=CountingLookup({}))
    assert resolver.resolve("file:///tmp/x.iv") == "/tmp/x.iv"


def test_file_uri_is_normalized_not_checked():
    resolver = URIResolver(lookup=CountingLookup({}))
    assert resolver.resolve("file:///does/not/../exist.stl") == "/does/exist.stl"


def test_package_uri():
    lookup = CountingLookup({"foo": "/opt/foo"})
    resolver = URIResolver(lookup=lookup)
    assert resolver.resolve("package://foo/meshes/x.stl") == "/opt/foo/meshes/x.stl"
    assert lookup.calls == ["foo"]


def test_package_lookup_is_cached():
    lookup = CountingLookup({"foo": "/opt/foo"})
    resolver = URIResolver(lookup=lookup)

    resolver.resolve("package://foo/a.stl")
    resolver.resolve("package://foo/b.stl")

    assert lookup.calls == ["foo"]
    assert "foo" in resolver.cache


def test_missing_package_warns_and_returns_empty(caplog):
    lookup = CountingLookup({})
    resolver = URIResolver(lookup=lookup)

    with caplog.at_level(logging.WARNING, logger="urdf_kinbody.io.uri"):
        assert resolver.resolve("package://missing/x") == ""
    assert "missing" in caplog.text

    # The miss is cached as well
    assert resolver.resolve("package://missing/y") == ""
    assert lookup.calls == ["missing"]


@pytest.mark.parametrize("uri", ["http://example.com/x.stl", "meshes/x.stl", ""])
def test_unknown_scheme_warns_and_returns_empty(uri, caplog):
    resolver = URIResolver(lookup=CountingLookup({}))
    with caplog.at_level(logging.WARNING, logger="urdf_kinbody.io.uri"):
        assert resolver.resolve(uri) == ""
    assert "Cannot handle mesh URI type" in caplog.text


def test_shared_cache_between_resolvers():
    cache = PackageCache()
    first = CountingLookup({"foo": "/opt/foo"})
    second = CountingLookup({"foo": "/somewhere/else"})

    URIResolver(lookup=first, cache=cache).resolve("package://foo/x")
    path = URIResolver(lookup=second, cache=cache).resolve("package://foo/x")

    assert path == "/opt/foo/x"
    assert second.calls == []
    assert len(cache) == 1


def test_find_package_from_ros_package_path(monkeypatch):
    monkeypatch.setenv("ROS_PACKAGE_PATH", str(PACKAGES))
    monkeypatch.delenv("CMAKE_PREFIX_PATH", raising=False)
    assert find_package("arm_description") == str(PACKAGES / "arm_description")
    assert find_package("not_a_package") == ""


def test_find_package_entry_is_package(monkeypatch):
    monkeypatch.setenv("ROS_PACKAGE_PATH", str(PACKAGES / "arm_description"))
    monkeypatch.delenv("CMAKE_PREFIX_PATH", raising=False)
    assert find_package("arm_description") == str(PACKAGES / "arm_description")


def test_find_package_from_cmake_prefix_path(monkeypatch, tmp_path):
    share = tmp_path / "share" / "other_description"
    share.mkdir(parents=True)
    monkeypatch.delenv("ROS_PACKAGE_PATH", raising=False)
    monkeypatch.setenv("CMAKE_PREFIX_PATH", str(tmp_path))
    assert find_package("other_description") == str(share)


def test_default_resolver_uses_environment(monkeypatch):
    monkeypatch.setenv("ROS_PACKAGE_PATH", str(PACKAGES))
    path = URIResolver().resolve("package://arm_description/meshes/cube.obj")
    assert path == str(PACKAGES / "arm_description" / "meshes" / "cube.obj")


def test_find_package_nested_in_workspace(monkeypatch, tmp_path):
    package_dir = tmp_path / "src" / "robots" / "gripper_description"
    package_dir.mkdir(parents=True)
    (package_dir / "package.xml").write_text(
        "<package format='2'><name>gripper_description</name><version>0.1.0</version></package>"
    )
    monkeypatch.setenv("ROS_PACKAGE_PATH", str(tmp_path / "src"))
    monkeypatch.delenv("CMAKE_PREFIX_PATH", raising=False)

    assert find_package("gripper_description") == str(package_dir)
