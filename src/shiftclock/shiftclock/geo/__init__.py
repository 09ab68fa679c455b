from .model import Coordinate, PerimeterPolicy
from .perimeter import distance_meters, is_within_perimeter
from .watch import PerimeterWatch, should_remind_clock_out

__all__ = [
    "Coordinate",
    "PerimeterPolicy",
    "PerimeterWatch",
    "distance_meters",
    "is_within_perimeter",
    "should_remind_clock_out",
]
