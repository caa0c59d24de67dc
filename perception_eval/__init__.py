"""3D object detection evaluation: matching, AP / APH and per-label reports."""

__version__ = "0.1.0"
__author__ = "Nagarjunan"

from . import utils
from . import geometry
from . import objects
from . import matching
from . import data
from . import result
from . import eval
