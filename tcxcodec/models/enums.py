"""Enumerated TCX vocabularies."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Sport(Enum):
    """Activity sport, from the ``Sport`` attribute of ``<Activity>``."""

    RUNNING = "Running"
    BIKING = "Biking"
    OTHER = "Other"


class Intensity(Enum):
    """Lap intensity."""

    ACTIVE = "Active"
    RESTING = "Resting"


class TriggerMethod(Enum):
    """What closed a lap."""

    MANUAL = "Manual"
    DISTANCE = "Distance"
    LOCATION = "Location"
    TIME = "Time"
    HEART_RATE = "HeartRate"


class SensorState(Enum):
    PRESENT = "Present"
    ABSENT = "Absent"


@dataclass(frozen=True)
class Unrecognized:
    """Enumeration text outside the published vocabulary.

    Kept verbatim so callers can inspect it and the writer can emit it again.
    """

    text: str

    @property
    def value(self) -> str:
        return self.text

    def __str__(self) -> str:
        return f"unrecognized({self.text})"


SportValue = Union[Sport, Unrecognized]
IntensityValue = Union[Intensity, Unrecognized]
TriggerMethodValue = Union[TriggerMethod, Unrecognized]
SensorStateValue = Union[SensorState, Unrecognized]
