"""Projection of camera images onto a top-down ground-plane map."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

# Height of the virtual map camera above the ground plane, in metres.
_MAP_CAMERA_HEIGHT = 1.0


@dataclass(frozen=True)
class MapCamera:
    """Intrinsics, rotation and position of the virtual top-down camera."""

    intrinsics: np.ndarray
    rotation: np.ndarray
    position: np.ndarray


def map_camera_properties(
    map_resolution: float, map_width: int, map_height: int
) -> MapCamera:
    """Virtual camera looking straight down on the ground ahead of the robot.

    ``map_resolution`` is in pixels per metre. The rendered image has
    ``map_height`` columns and ``map_width`` rows; it is turned into the
    occupancy grid's orientation afterwards.
    """
    if map_resolution <= 0:
        raise ValueError("map_resolution must be positive")
    if map_width <= 0 or map_height <= 0:
        raise ValueError("map dimensions must be positive")
    image_columns = map_height
    image_rows = map_width
    rotation = np.array([[0.0, -1.0, 0.0], [-1.0, 0.0, 0.0], [0.0, 0.0, -1.0]])
    z = _MAP_CAMERA_HEIGHT
    focal = map_resolution * z
    y = image_rows / (2 * map_resolution)
    position = np.array([0.0, y, z])
    intrinsics = np.array(
        [
            [focal, 0.0, image_columns / 2.0],
            [0.0, focal, image_rows / 2.0],
            [0.0, 0.0, 1.0],
        ]
    )
    return MapCamera(intrinsics=intrinsics, rotation=rotation, position=position)


def ground_plane_homography(camera_intrinsics, base_to_camera, map_camera: MapCamera) -> np.ndarray:
    """Homography taking robot camera pixels to map camera pixels.

    ``base_to_camera`` is the 4x4 transform taking points in the robot's
    ground frame into the camera frame. The ground is the plane Z=0 of the
    ground frame with its normal along +Z.
    """
    k = np.asarray(camera_intrinsics, dtype=float)
    transform = np.asarray(base_to_camera, dtype=float)
    if k.shape != (3, 3):
        raise ValueError("camera_intrinsics must be a 3x3 matrix")
    if transform.shape != (4, 4):
        raise ValueError("base_to_camera must be a 4x4 matrix")

    rb = transform[:3, :3]
    tb = transform[:3, 3:4]
    n = rb @ np.array([[0.0], [0.0], [1.0]])
    d = abs(float((n.T @ tb)[0, 0])) / float(np.linalg.norm(n))
    if d == 0:
        raise ValueError("camera lies on the ground plane")

    map_rotation = map_camera.rotation
    map_position = np.asarray(map_camera.position, dtype=float).reshape(3, 1)
    relative_rotation = map_rotation @ rb.T
    relative_translation = -relative_rotation @ tb + map_position
    m = relative_rotation - (relative_translation @ n.T) / d
    return map_camera.intrinsics @ m @ np.linalg.inv(k)


def map_value_from_image_value(image_value: int) -> int:
    """Occupancy value for a thresholded pixel: 0 free, 100 occupied, -1 unknown."""
    if not 0 <= image_value <= 255:
        raise ValueError("image value must lie in 0..255")
    if image_value == 0:
        return 0
    if image_value == 255:
        return 100
    return -1