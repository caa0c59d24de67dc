"""Frame ground-truth containers, frame file loading and object filtering."""

from .dataset import FrameGroundTruth, get_current_frame
from .filter import filter_objects, is_target_object
from .loader import load_frames, object_from_dict

__all__ = [
    "FrameGroundTruth",
    "get_current_frame",
    "filter_objects",
    "is_target_object",
    "load_frames",
    "object_from_dict",
]
