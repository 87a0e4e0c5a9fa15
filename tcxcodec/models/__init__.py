"""Data models for tcx-codec."""

from .activity import (
    Activities,
    Activity,
    Author,
    Build,
    Creator,
    Document,
    Lap,
    LapExtensions,
    Position,
    RawExtension,
    Track,
    Trackpoint,
    TrackpointExtensions,
    Version,
)
from .enums import Intensity, SensorState, Sport, TriggerMethod, Unrecognized

__all__ = [
    'Activities',
    'Activity',
    'Author',
    'Build',
    'Creator',
    'Document',
    'Lap',
    'LapExtensions',
    'Position',
    'RawExtension',
    'Track',
    'Trackpoint',
    'TrackpointExtensions',
    'Version',
    'Intensity',
    'SensorState',
    'Sport',
    'TriggerMethod',
    'Unrecognized',
]
