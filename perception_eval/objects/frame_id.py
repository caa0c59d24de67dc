"""Coordinate frame tags."""

from enum import Enum


class FrameID(Enum):
    """Coordinate frame an object is expressed in."""

    # 3D
    BASE_LINK = "base_link"
    MAP = "map"

    # 2D
    CAM_BACK = "cam_back"
    CAM_BACK_LEFT = "cam_back_left"
    CAM_BACK_RIGHT = "cam_back_right"
    CAM_FRONT = "cam_front"
    CAM_FRONT_LEFT = "cam_front_left"
    CAM_FRONT_RIGHT = "cam_front_right"
    CAM_TRAFFIC_LIGHT_NEAR = "cam_traffic_light_near"
    CAM_TRAFFIC_LIGHT_FAR = "cam_traffic_light_far"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, name: str) -> "FrameID":
        """
        Parse a frame id from snake case (``base_link``) or camel case
        (``BaseLink``).
        """
        for frame_id in cls:
            camel = "".join(part.capitalize() for part in frame_id.value.split("_"))
            if name in (frame_id.value, camel):
                return frame_id
        raise ValueError(f"Unknown frame id: {name}")

    def is_3d(self) -> bool:
        return self in (FrameID.BASE_LINK, FrameID.MAP)
