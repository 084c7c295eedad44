"""Rotation and rigid-transform helpers built on numpy."""

import numpy as np

_EPS = np.finfo(np.float64).eps


def _as_vec3(value, name="vector"):
    arr = np.asarray(value, dtype=np.float64)
    if arr.size != 3 or arr.ndim > 2:
        raise ValueError(f"{name} must hold exactly 3 values, got shape {arr.shape}")
    return arr.reshape(3)


def _as_matrix(value, rows, cols, name="matrix"):
    arr = np.asarray(value, dtype=np.float64)
    if arr.shape != (rows, cols):
        raise ValueError(f"{name} must have shape ({rows}, {cols}), got {arr.shape}")
    return arr


def rodrigues_to_matrix(rvec):
    """Convert a Rodrigues rotation vector to a 3x3 rotation matrix."""
    r = _as_vec3(rvec, "rvec")
    theta = float(np.linalg.norm(r))
    if theta < _EPS:
        return np.eye(3)
    axis = r / theta
    c, s = np.cos(theta), np.sin(theta)
    skew = np.array(
        [
            [0.0, -axis[2], axis[1]],
            [axis[2], 0.0, -axis[0]],
            [-axis[1], axis[0], 0.0],
        ]
    )
    return c * np.eye(3) + (1.0 - c) * np.outer(axis, axis) + s * skew


def matrix_to_rodrigues(rot):
    """Convert a 3x3 rotation matrix to a Rodrigues rotation vector."""
    m = _as_matrix(rot, 3, 3, "rotation")
    u, _, vt = np.linalg.svd(m)
    r = u @ vt

    rx = r[2, 1] - r[1, 2]
    ry = r[0, 2] - r[2, 0]
    rz = r[1, 0] - r[0, 1]
    s = np.sqrt((rx * rx + ry * ry + rz * rz) * 0.25)
    diagonal_sum = float(r[0, 0] + r[1, 1] + r[2, 2])
    c = float(np.clip((diagonal_sum - 1.0) * 0.5, -1.0, 1.0))
    theta = np.arccos(c)

    if s < 1e-5:
        if c > 0:
            return np.zeros(3)
        rx = np.sqrt(max((r[0, 0] + 1.0) * 0.5, 0.0))
        ry = np.sqrt(max((r[1, 1] + 1.0) * 0.5, 0.0)) * (-1.0 if r[0, 1] < 0 else 1.0)
        rz = np.sqrt(max((r[2, 2] + 1.0) * 0.5, 0.0)) * (-1.0 if r[0, 2] < 0 else 1.0)
        if abs(rx) < abs(ry) and abs(rx) < abs(rz) and ((r[1, 2] > 0) != (ry * rz > 0)):
            rz = -rz
        vec = np.array([rx, ry, rz])
        return vec * (theta / np.linalg.norm(vec))

    scale = theta / (2.0 * s)
    return np.array([rx, ry, rz]) * scale


def rotation_from_transform(mat):
    """Return the upper-left 3x3 rotation block of a 4x4 transform."""
    m = _as_matrix(mat, 4, 4, "transform")
    return m[:3, :3].copy()


def translation_from_transform(mat):
    """Return the translation column of a 4x4 transform."""
    m = _as_matrix(mat, 4, 4, "transform")
    return m[:3, 3].copy()


def convert_world_to_local(xform, vec):
    """Rotate a world-space direction into the local frame: M^-1 * v."""
    m = _as_matrix(xform, 4, 4, "transform")
    v = _as_vec3(vec)
    try:
        inv = np.linalg.inv(m)
    except np.linalg.LinAlgError as exc:
        raise ValueError("transform is singular") from exc
    return inv[:3, :3] @ v


def convert_local_to_world(xform, vec):
    """Rotate a local-space direction into the world frame: M * v."""
    m = _as_matrix(xform, 4, 4, "transform")
    v = _as_vec3(vec)
    return m[:3, :3] @ v


def transform_from_translation_rotation_rodrigues(pos, rodrigues):
    """Build a 4x4 transform from a translation and a Rodrigues rotation."""
    t = _as_vec3(pos, "pos")
    out = np.eye(4)
    out[:3, :3] = rodrigues_to_matrix(rodrigues)
    out[:3, 3] = t
    return out


def rodrigues_from_transform(transform):
    """Extract the Rodrigues rotation vector of a 4x4 transform."""
    return matrix_to_rodrigues(rotation_from_transform(transform))