"""Helpers that turn camera poses, images and points into visual log records."""

from __future__ import annotations

import io
import random
import sys
from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from poseview.matrix import (
    rotation_from_transform,
    transform_from_translation_rotation_rodrigues,
    translation_from_transform,
)
from poseview.recording import ColorModel, TextLogLevel

RFU_TO_RUB = np.array(
    [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, -1.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]
)

_KEYPOINT_RADIUS = 3


@dataclass(frozen=True)
class KeyPoint:
    """A detected image feature."""

    x: float
    y: float
    size: float = 1.0
    angle: float = -1.0
    response: float = 0.0
    octave: int = 0
    class_id: int = -1


def _emit(text, level):
    stream = sys.stderr if level == TextLogLevel.ERROR else sys.stdout
    print(text, file=stream)


def log_message(path, message, rec, level=TextLogLevel.INFO):
    """Print a message (errors to stderr) and log it as text."""
    _emit(message, level)
    rec.log(path, "text_log", text=str(message), level=TextLogLevel(level))


def log_stream_and_clear(path, buffer, rec, level=TextLogLevel.INFO):
    """Print and log the contents of a text buffer, then empty the buffer."""
    text = buffer.getvalue()
    _emit(text, level)
    rec.log(path, "text_log", text=text, level=TextLogLevel(level))
    buffer.seek(0)
    buffer.truncate(0)


def log_transform3d(path, transform, scale, rec):
    """Log a 4x4 rigid transform as translation, 3x3 rotation and scale."""
    rotation = rotation_from_transform(transform)
    translation = translation_from_transform(transform)
    rec.log(
        path,
        "transform3d",
        translation=translation,
        mat3x3=rotation,
        scale=np.asarray(scale, dtype=np.float64).reshape(3),
    )


def log_axis_system(path, scale, rec):
    """Log three coloured arrows along X (red), Y (green) and Z (blue)."""
    rec.log(
        path,
        "arrows3d",
        vectors=np.eye(3, dtype=np.float32) * np.float32(scale),
        origins=np.zeros((3, 3), dtype=np.float32),
        colors=np.array(
            [[255, 0, 0, 255], [0, 255, 0, 255], [0, 0, 255, 255]], dtype=np.uint8
        ),
    )


def _to_pil(arr):
    if arr.dtype != np.uint8:
        raise ValueError(f"only 8-bit images can be drawn on, got {arr.dtype}")
    if arr.ndim == 3 and arr.shape[2] == 1:
        arr = arr[:, :, 0]
    if arr.ndim == 2:
        return Image.fromarray(np.ascontiguousarray(arr), mode="L"), 0
    if arr.ndim == 3 and arr.shape[2] == 3:
        return Image.fromarray(np.ascontiguousarray(arr), mode="RGB"), None
    if arr.ndim == 3 and arr.shape[2] == 4:
        return Image.fromarray(np.ascontiguousarray(arr), mode="RGBA"), None
    raise ValueError(f"unsupported image shape {arr.shape}")


def _draw_tag(img, tag):
    pil, _ = _to_pil(img)
    channels = 1 if pil.mode == "L" else len(pil.mode)
    fill = (0, 255, 0, 0)[:channels] if channels > 1 else 0
    draw = ImageDraw.Draw(pil)
    font = ImageFont.load_default()
    bottom = draw.textbbox((0, 0), tag, font=font)[3]
    # The anchor point (10, 10) is the bottom-left corner of the text.
    draw.text((10, 10 - bottom), tag, fill=fill, font=font)
    img[...] = np.asarray(pil).reshape(img.shape)


def log_mat_image(path, img, color_model, rec, tag=""):
    """Log an image array; a non-empty tag is first drawn onto the image in place."""
    arr = img if isinstance(img, np.ndarray) else np.asarray(img)
    if tag:
        _draw_tag(arr, tag)
    height, width = arr.shape[:2] if arr.ndim >= 2 else (0, 0)
    rec.log(
        path,
        "image",
        data=arr.copy(),
        width=int(width),
        height=int(height),
        color_model=ColorModel(color_model),
    )


def log_keypoints_image(path, keypoints, image, rec):
    """Convert a grayscale image to BGR, circle each keypoint and log it."""
    gray = np.asarray(image)
    if gray.ndim == 3 and gray.shape[2] == 1:
        gray = gray[:, :, 0]
    if gray.ndim != 2:
        raise ValueError(f"expected a single-channel image, got shape {gray.shape}")
    bgr = np.repeat(gray[:, :, np.newaxis], 3, axis=2).astype(np.uint8)
    pil, _ = _to_pil(bgr)
    draw = ImageDraw.Draw(pil)
    rng = random.Random(0)
    for kp in keypoints:
        cx, cy = round(kp.x), round(kp.y)
        color = tuple(rng.randint(0, 255) for _ in range(3))
        draw.ellipse(
            [cx - _KEYPOINT_RADIUS, cy - _KEYPOINT_RADIUS,
             cx + _KEYPOINT_RADIUS, cy + _KEYPOINT_RADIUS],
            outline=color,
        )
    draw_img = np.asarray(pil).copy()
    log_mat_image(path, draw_img, ColorModel.BGR, rec)


def log_points3d(path, points, rec):
    """Log 3D points, each white with radius 0.1."""
    positions = np.asarray(list(points), dtype=np.float32).reshape(-1, 3)
    count = len(positions)
    rec.log(
        path,
        "points3d",
        positions=positions,
        colors=np.full((count, 4), 255, dtype=np.uint8),
        radii=np.full(count, 0.1, dtype=np.float32),
    )


def _format_vec(vec):
    return "[" + ", ".join(f"{v:g}" for v in vec) + "]"


def _format_matrix(mat):
    rows = (", ".join(f"{v:.16g}" for v in row) for row in mat)
    return "[" + ";\n ".join(rows) + "]"


def log_pose_estimation(path, image, rvec, tvec, camera_matrix, rec):
    """Log a pose estimate: vectors, intrinsics, axes, image and posed pinhole camera."""
    r = np.asarray(rvec, dtype=np.float64).reshape(3)
    t = np.asarray(tvec, dtype=np.float64).reshape(3)
    cm = np.asarray(camera_matrix, dtype=np.float64)
    if cm.shape != (3, 3):
        raise ValueError(f"camera matrix must have shape (3, 3), got {cm.shape}")

    main_path = f"{path}/pose_estimate"
    buffer = io.StringIO()

    buffer.write(f"curr_rvec = {_format_vec(r)}")
    log_stream_and_clear(main_path, buffer, rec)
    rec.log(f"{main_path}/pose_vecs/rvec", "tensor", shape=(3, 1), data=r.astype(np.float32))

    buffer.write(f"curr_tvec = {_format_vec(t)}")
    log_stream_and_clear(main_path, buffer, rec)
    rec.log(f"{main_path}/pose_vecs/tvec", "tensor", shape=(3, 1), data=t.astype(np.float32))

    buffer.write(f"Camera Matrix: {_format_matrix(cm)}")
    log_stream_and_clear(f"{main_path}/calibration", buffer, rec)

    # The pose is a view matrix; the camera's world transform is its inverse,
    # re-expressed from RUB into RFU orientation.
    view = transform_from_translation_rotation_rodrigues(t, r)
    transform = RFU_TO_RUB @ np.linalg.inv(view)

    axis_path = f"{main_path}/axis"
    log_axis_system(axis_path, 1.0, rec)
    log_transform3d(axis_path, RFU_TO_RUB, (10.0, 10.0, 10.0), rec)

    image_path = f"{main_path}/image"
    if image is None or np.asarray(image).size == 0:
        log_message(image_path, "Image is EMPTY!", rec, TextLogLevel.ERROR)
    else:
        log_mat_image(image_path, image, ColorModel.BGR, rec)

    rec.log(
        image_path,
        "pinhole",
        focal_length=np.array([cm[0, 0], cm[1, 1]], dtype=np.float32),
        resolution=np.array([cm[0, 2] * 2.0, cm[1, 2] * 2.0], dtype=np.float32),
        camera_xyz="RDF",
        image_plane_distance=1.0,
    )
    log_transform3d(image_path, transform, (1.0, 1.0, 1.0), rec)