"""Object labels and label-name conversion."""

import logging
from enum import Enum
from typing import Dict, List, Sequence

logger = logging.getLogger(__name__)


class Label(Enum):
    """Closed set of object classes. Compared by equality only."""

    UNKNOWN = "Unknown"
    CAR = "Car"
    TRUCK = "Truck"
    BUS = "Bus"
    BICYCLE = "Bicycle"
    MOTORBIKE = "Motorbike"
    PEDESTRIAN = "Pedestrian"
    ANIMAL = "Animal"

    def __str__(self) -> str:
        return self.value


# Autoware and nuScenes category names
_AUTOWARE_NAMES: Dict[Label, List[str]] = {
    Label.UNKNOWN: ["unknown"],
    Label.CAR: [
        "car",
        "vehicle.car",
        "vehicle.emergency.police",
        "vehicle.emergency.ambulance",
    ],
    Label.TRUCK: [
        "truck",
        "trailer",
        "vehicle.truck",
        "vehicle.trailer",
        "vehicle.construction",
    ],
    Label.BUS: ["bus", "vehicle.bus", "vehicle.bus.bendy", "vehicle.bus.rigid"],
    Label.BICYCLE: ["bicycle", "vehicle.bicycle"],
    Label.MOTORBIKE: ["motorbike", "motorcycle", "vehicle.motorcycle"],
    Label.PEDESTRIAN: [
        "pedestrian",
        "pedestrian.adult",
        "pedestrian.child",
        "pedestrian.construction_worker",
        "pedestrian.personal_mobility",
        "pedestrian.police_officer",
        "pedestrian.stroller",
        "pedestrian.wheelchair",
        "human.pedestrian.adult",
        "human.pedestrian.child",
        "human.pedestrian.construction_worker",
        "human.pedestrian.personal_mobility",
        "human.pedestrian.police_officer",
        "human.pedestrian.stroller",
        "human.pedestrian.wheelchair",
    ],
    Label.ANIMAL: ["animal", "static_object.animal"],
}

_LABEL_TABLES: Dict[str, Dict[Label, List[str]]] = {
    "autoware": _AUTOWARE_NAMES,
}


class LabelConverter:
    """
    Convert dataset or configuration label names into ``Label``.

    Matching is case-insensitive. Canonical names (``"Car"``) are always
    accepted in addition to the aliases of the selected table.
    """

    def __init__(self, label_prefix: str = "autoware", strict: bool = True):
        """
        Initialize label converter.

        Args:
            label_prefix: Name of the alias table to use.
            strict: Raise on unknown names instead of mapping them to
                ``Label.UNKNOWN``.
        """
        if label_prefix not in _LABEL_TABLES:
            raise ValueError(
                f"Unknown label prefix: {label_prefix}. Valid: {list(_LABEL_TABLES.keys())}"
            )

        self.label_prefix = label_prefix
        self.strict = strict

        self._lookup: Dict[str, Label] = {}
        for label, names in _LABEL_TABLES[label_prefix].items():
            self._lookup[label.value.lower()] = label
            for name in names:
                self._lookup[name.lower()] = label

    def convert(self, name: str) -> Label:
        """
        Convert a single label name.

        Args:
            name: Label name, e.g. ``"car"`` or ``"vehicle.car"``.

        Returns:
            Corresponding ``Label``.
        """
        label = self._lookup.get(name.strip().lower())
        if label is not None:
            return label

        if self.strict:
            raise ValueError(f"Unknown label name: {name}")

        logger.warning(f"Unknown label name '{name}', using {Label.UNKNOWN}")
        return Label.UNKNOWN


def convert_labels(
    names: Sequence[str],
    converter: LabelConverter = None,
) -> List[Label]:
    """
    Convert a list of label names, rejecting unknown names.

    Args:
        names: Label names.
        converter: Converter to use (strict autoware converter if None).

    Returns:
        List of labels in input order.
    """
    converter = converter or LabelConverter("autoware", strict=True)
    return [converter.convert(name) for name in names]


def get_label_threshold(
    label: Label,
    target_labels: Sequence[Label],
    thresholds: Sequence,
):
    """
    Look up the value aligned with ``label`` in a per-label list.

    Args:
        label: Label to look up.
        target_labels: Evaluated labels; index basis of ``thresholds``.
        thresholds: Values index-aligned with ``target_labels``.

    Returns:
        The aligned value, or None when the label is not a target.
    """
    if label not in target_labels:
        return None
    return thresholds[list(target_labels).index(label)]
