"""SO(3) rotation helpers in JAX.

Rotations are represented as 3x3 matrices. URDF expresses orientations as
fixed-axis roll/pitch/yaw angles, so the entry point from a parsed document
is `from_rpy`. All functions are pure and operate on JAX arrays.
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def from_rpy(rpy: Array) -> Array:
    """
    Convert roll-pitch-yaw angles to a rotation matrix.

    The angles are applied about the fixed x, y and z axes in that order,
    so the combined rotation is R = Rz(yaw) @ Ry(pitch) @ Rx(roll).

    Args:
        rpy: (..., 3) array of [roll, pitch, yaw] angles in radians

    Returns:
        (..., 3, 3) array of rotation matrices
    """
    roll, pitch, yaw = jnp.moveaxis(jnp.asarray(rpy), -1, 0)

    cr, sr = jnp.cos(roll), jnp.sin(roll)
    cp, sp = jnp.cos(pitch), jnp.sin(pitch)
    cy, sy = jnp.cos(yaw), jnp.sin(yaw)

    # Expanded product Rz @ Ry @ Rx
    return jnp.stack([
        jnp.stack([cy*cp, cy*sp*sr - sy*cr, cy*sp*cr + sy*sr], axis=-1),
        jnp.stack([sy*cp, sy*sp*sr + cy*cr, sy*sp*cr - cy*sr], axis=-1),
        jnp.stack([-sp, cp*sr, cp*cr], axis=-1)
    ], axis=-2)


def apply(R: Array, v: Array) -> Array:
    """
    Apply rotation to vector(s).

    Args:
        R: (..., 3, 3) rotation matrix
        v: (..., 3) or (..., N, 3) vector(s) to rotate

    Returns:
        (..., 3) or (..., N, 3) rotated vector(s)
    """
    if v.ndim == R.ndim - 1:  # Single vector case
        return jnp.einsum('...ij,...j->...i', R, v)
    else:  # Multiple vectors case
        return jnp.einsum('...ij,...nj->...ni', R, v)
