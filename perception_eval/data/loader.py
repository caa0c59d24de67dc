"""
Frame File Loader.

Frame File Format (YAML):
=========================

    frames:
      - timestamp: 1000000            # microseconds
        ground_truths:
          - label: car
            position: [10.0, 0.0, 0.5]
            orientation: [1.0, 0.0, 0.0, 0.0]   # [w, x, y, z]
            size: [4.0, 2.0, 1.5]               # [length, width, height]
            velocity: [1.0, 0.0, 0.0]           # optional
            pointcloud_num: 120                 # optional
            uuid: car-0                         # optional
        estimations:
          - label: car
            position: [10.2, 0.1, 0.5]
            orientation: [1.0, 0.0, 0.0, 0.0]
            size: [4.1, 2.0, 1.5]
            confidence: 0.9                     # optional, default 1.0

Frames are returned in file order.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..objects import DynamicObject, FrameID, LabelConverter
from ..utils.config_loader import ConfigLoader
from .dataset import FrameGroundTruth

logger = logging.getLogger(__name__)


def object_from_dict(
    params: Dict[str, Any],
    timestamp: int,
    frame_id: FrameID,
    converter: LabelConverter,
) -> DynamicObject:
    """
    Build an object from one entry of a frame file.

    Args:
        params: Object entry.
        timestamp: Frame timestamp in microseconds.
        frame_id: Frame the object is expressed in.
        converter: Label name converter.

    Returns:
        DynamicObject instance.
    """
    return DynamicObject(
        timestamp=timestamp,
        frame_id=frame_id,
        position=params["position"],
        orientation=params["orientation"],
        size=params["size"],
        label=converter.convert(params["label"]),
        confidence=float(params.get("confidence", 1.0)),
        velocity=params.get("velocity"),
        pointcloud_num=params.get("pointcloud_num"),
        uuid=params.get("uuid"),
    )


def load_frames(
    frames_path: Union[str, Path],
    frame_id: FrameID = FrameID.BASE_LINK,
    converter: Optional[LabelConverter] = None,
) -> List[Tuple[FrameGroundTruth, List[DynamicObject]]]:
    """
    Load ground truths and estimations of every frame.

    Args:
        frames_path: Path to the frame file.
        frame_id: Frame the objects are expressed in.
        converter: Label name converter (non-strict autoware if None).

    Returns:
        One (ground truth, estimations) pair per frame, in file order.
    """
    frames_path = Path(frames_path)
    converter = converter or LabelConverter("autoware", strict=False)

    content = ConfigLoader(config_dir=frames_path.parent).load(frames_path)
    if "frames" not in content:
        raise KeyError(f"Missing 'frames' in {frames_path}")

    frames = []
    for entry in content["frames"] or []:
        timestamp = int(entry["timestamp"])
        ground_truths = [
            object_from_dict(obj, timestamp, frame_id, converter)
            for obj in entry.get("ground_truths") or []
        ]
        estimations = [
            object_from_dict(obj, timestamp, frame_id, converter)
            for obj in entry.get("estimations") or []
        ]
        frames.append((FrameGroundTruth(timestamp, ground_truths), estimations))

    logger.info(f"Loaded {len(frames)} frames from {frames_path}")
    return frames
