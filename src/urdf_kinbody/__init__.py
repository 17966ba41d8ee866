"""
urdf_kinbody: load URDF robot descriptions as articulated bodies.

A URDF is parsed into a document of links and joints, translated into flat
link and joint records with resolved frames, axes, limits and geometry, and
handed to a host environment that builds and registers the body.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import transforms
from . import core
from . import io
from .core import LoadError
from .host import BodyEnvironment, InMemoryEnvironment, KinBody
from .loader import load_urdf, translate_document

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "core",
    "io",
    "LoadError",
    "BodyEnvironment",
    "InMemoryEnvironment",
    "KinBody",
    "load_urdf",
    "translate_document",
]
