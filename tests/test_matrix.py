import numpy as np
import pytest

from poseview.data import POSES
from poseview.matrix import (
    convert_local_to_world,
    convert_world_to_local,
    matrix_to_rodrigues,
    rodrigues_from_transform,
    rodrigues_to_matrix,
    rotation_from_transform,
    transform_from_translation_rotation_rodrigues,
    translation_from_transform,
)

SAMPLE_RVECS = [
    np.array([0.1, -0.2, 0.3]),
    np.array([1.0, 0.5, -0.25]),
    np.array([0.0, 0.0, 2.5]),
    np.array([-1.2, 0.7, 0.4]),
]


def test_zero_rvec_gives_identity():
    assert np.allclose(rodrigues_to_matrix([0.0, 0.0, 0.0]), np.eye(3))


def test_identity_gives_zero_rvec():
    assert np.allclose(matrix_to_rodrigues(np.eye(3)), np.zeros(3))


def test_quarter_turn_about_z():
    rot = rodrigues_to_matrix([0.0, 0.0, np.pi / 2])
    assert np.allclose(rot @ np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])


@pytest.mark.parametrize("rvec", SAMPLE_RVECS)
def test_rotation_is_orthonormal(rvec):
    rot = rodrigues_to_matrix(rvec)
    assert np.allclose(rot @ rot.T, np.eye(3))
    assert np.isclose(np.linalg.det(rot), 1.0)


@pytest.mark.parametrize("rvec", SAMPLE_RVECS)
def test_rodrigues_round_trip(rvec):
    assert np.allclose(matrix_to_rodrigues(rodrigues_to_matrix(rvec)), rvec)


def test_column_vector_input_accepted():
    rvec = np.array([[0.3], [0.2], [0.1]])
    assert np.allclose(rodrigues_to_matrix(rvec), rodrigues_to_matrix(rvec.ravel()))


@pytest.mark.parametrize("axis", [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
def test_half_turn_round_trip(axis):
    rvec = np.array(axis) * np.pi
    back = matrix_to_rodrigues(rodrigues_to_matrix(rvec))
    assert np.isclose(np.linalg.norm(back), np.pi)
    assert np.allclose(rodrigues_to_matrix(back), rodrigues_to_matrix(rvec))


def test_poses_round_trip():
    for rvec, tvec in POSES:
        xform = transform_from_translation_rotation_rodrigues(tvec, rvec)
        assert np.allclose(rodrigues_from_transform(xform), rvec, atol=1e-9)
        assert np.allclose(translation_from_transform(xform), tvec)


def test_transform_layout():
    rvec = SAMPLE_RVECS[1]
    pos = [4.0, -5.0, 6.0]
    xform = transform_from_translation_rotation_rodrigues(pos, rvec)
    assert xform.shape == (4, 4)
    assert np.allclose(xform[3], [0.0, 0.0, 0.0, 1.0])
    assert np.allclose(rotation_from_transform(xform), rodrigues_to_matrix(rvec))
    assert np.allclose(translation_from_transform(xform), pos)


def test_extraction_from_arbitrary_matrix():
    mat = np.arange(16, dtype=float).reshape(4, 4)
    assert np.array_equal(rotation_from_transform(mat), mat[:3, :3])
    assert np.array_equal(translation_from_transform(mat), mat[:3, 3])


def test_extraction_does_not_alias_input():
    mat = np.eye(4)
    rot = rotation_from_transform(mat)
    rot[0, 0] = 7.0
    assert mat[0, 0] == 1.0


@pytest.mark.parametrize("rvec", SAMPLE_RVECS)
def test_world_local_round_trip(rvec):
    xform = transform_from_translation_rotation_rodrigues([1.0, 2.0, 3.0], rvec)
    vec = np.array([0.5, -1.5, 2.0])
    local = convert_world_to_local(xform, vec)
    assert np.allclose(convert_local_to_world(xform, local), vec)
    assert np.isclose(np.linalg.norm(local), np.linalg.norm(vec))


def test_translation_ignored_for_directions():
    rvec = SAMPLE_RVECS[0]
    a = transform_from_translation_rotation_rodrigues([0.0, 0.0, 0.0], rvec)
    b = transform_from_translation_rotation_rodrigues([10.0, -3.0, 8.0], rvec)
    vec = [1.0, 1.0, 1.0]
    assert np.allclose(convert_local_to_world(a, vec), convert_local_to_world(b, vec))
    assert np.allclose(convert_world_to_local(a, vec), convert_world_to_local(b, vec))


def test_identity_transform_leaves_vector():
    vec = np.array([3.0, -2.0, 1.0])
    assert np.allclose(convert_local_to_world(np.eye(4), vec), vec)
    assert np.allclose(convert_world_to_local(np.eye(4), vec), vec)


def test_singular_transform_raises():
    with pytest.raises(ValueError):
        convert_world_to_local(np.zeros((4, 4)), [1.0, 0.0, 0.0])


@pytest.mark.parametrize("bad", [[1.0, 2.0], [1.0, 2.0, 3.0, 4.0]])
def test_bad_vector_shape_raises(bad):
    with pytest.raises(ValueError):
        rodrigues_to_matrix(bad)


def test_bad_matrix_shape_raises():
    with pytest.raises(ValueError):
        rotation_from_transform(np.eye(3))
    with pytest.raises(ValueError):
        matrix_to_rodrigues(np.eye(4))