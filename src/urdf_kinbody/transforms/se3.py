"""SE(3) rigid-body transforms as 4x4 homogeneous matrices in JAX.

Every frame carried by the body records (link frames, mass frames, geometry
frames) is one of these matrices. All functions are pure and operate on JAX
arrays.
"""


import jax
import jax.numpy as jnp

from . import so3

Array = jax.Array


def from_position_and_rotation(p: Array, R: Array) -> Array:
    """
    Construct SE(3) transform from position and rotation.

    Args:
        p: (..., 3) position vector
        R: (..., 3, 3) rotation matrix

    Returns:
        (..., 4, 4) homogeneous transformation matrix
    """
    p = jnp.asarray(p, dtype=jnp.float64)
    R = jnp.asarray(R, dtype=jnp.float64)

    # Ensure consistent batch shapes
    batch_shape = jnp.broadcast_shapes(p.shape[:-1], R.shape[:-2])
    p = jnp.broadcast_to(p, batch_shape + (3,))
    R = jnp.broadcast_to(R, batch_shape + (3, 3))

    T = jnp.zeros(batch_shape + (4, 4), dtype=p.dtype)
    T = T.at[..., :3, :3].set(R)
    T = T.at[..., :3, 3].set(p)
    T = T.at[..., 3, 3].set(1.0)

    return T


def from_xyz_rpy(xyz: Array, rpy: Array) -> Array:
    """
    Construct SE(3) transform from a URDF-style translation and rpy angles.

    Args:
        xyz: (..., 3) translation
        rpy: (..., 3) roll, pitch, yaw in radians

    Returns:
        (..., 4, 4) homogeneous transformation matrix
    """
    return from_position_and_rotation(jnp.asarray(xyz), so3.from_rpy(rpy))


def identity() -> Array:
    """Return the 4x4 identity transform."""
    return jnp.eye(4, dtype=jnp.float64)


def get_position(T: Array) -> Array:
    """
    Extract position from SE(3) transformation matrix.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 3) position vector
    """
    return T[..., :3, 3]


def get_rotation(T: Array) -> Array:
    """
    Extract rotation matrix from SE(3) transformation matrix.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 3, 3) rotation matrix
    """
    return T[..., :3, :3]
