"""Shared fixtures for urdf_kinbody tests."""

import os
from pathlib import Path

import hypothesis
import pytest

from urdf_kinbody.host import InMemoryEnvironment
from urdf_kinbody.io.uri import URIResolver

FIXTURES = Path(__file__).parent / "fixtures"
PACKAGES = FIXTURES / "packages"

hypothesis.settings.register_profile("ci", max_examples=10, deadline=None)
hypothesis.settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture
def arm_urdf() -> str:
    return str(FIXTURES / "test_arm.urdf")


@pytest.fixture
def arm_config() -> str:
    return str(FIXTURES / "arm_joints.yaml")


@pytest.fixture
def env() -> InMemoryEnvironment:
    return InMemoryEnvironment()


@pytest.fixture
def resolver() -> URIResolver:
    """Resolver that finds packages under tests/fixtures/packages only."""

    def lookup(name):
        path = PACKAGES / name
        return str(path) if path.is_dir() else ""

    return URIResolver(lookup=lookup)


@pytest.fixture
def fake_resolver() -> URIResolver:
    """Resolver that knows a single package, `foo`, at /opt/foo."""
    return URIResolver(lookup={"foo": "/opt/foo"}.get)
