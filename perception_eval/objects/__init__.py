"""Object value types: labels, frame ids and dynamic objects."""

from .label import Label, LabelConverter, convert_labels, get_label_threshold
from .frame_id import FrameID
from .dynamic_object import DynamicObject, ObjectState

__all__ = [
    "Label",
    "LabelConverter",
    "convert_labels",
    "get_label_threshold",
    "FrameID",
    "DynamicObject",
    "ObjectState",
]
