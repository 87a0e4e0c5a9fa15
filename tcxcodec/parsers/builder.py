"""Entity tree builder: assembles typed TCX entities from element events.

The builder keeps an explicit stack of partial frames mirroring the element
nesting instead of recursing, so deeply nested input cannot exhaust the call
stack and every frame knows its own path for error reporting.
"""

import logging
from typing import Any, List, Optional

from ..exceptions import MissingRequiredField
from ..models.activity import (
    Activities,
    Activity,
    Author,
    Build,
    Creator,
    Document,
    Lap,
    Position,
    Track,
    Trackpoint,
    Version,
)
from ..models.enums import Intensity, SensorState, Sport, TriggerMethod
from ..models.namespaces import TCX_NS, qname
from .decoders import (
    decode_duration,
    decode_float,
    decode_heart_rate,
    decode_latitude,
    decode_longitude,
    decode_non_negative_float,
    decode_non_negative_int,
    decode_text,
    decode_timestamp,
    enum_decoder,
)
from .extensions import ExtensionsFrame, LapExtensionsFrame, TrackpointExtensionsFrame
from .frames import EntityFrame, Frame

logger = logging.getLogger(__name__)

ROOT_TAG = qname(TCX_NS, 'TrainingCenterDatabase')


class VersionFrame(EntityFrame):
    entity = 'Version'
    model = Version
    leaves = {
        'VersionMajor': ('version_major', decode_text),
        'VersionMinor': ('version_minor', decode_text),
        'BuildMajor': ('build_major', decode_text),
        'BuildMinor': ('build_minor', decode_text),
    }


class CreatorFrame(EntityFrame):
    entity = 'Creator'
    model = Creator
    leaves = {
        'Name': ('name', decode_text),
        'UnitId': ('unit_id', decode_text),
        'ProductID': ('product_id', decode_text),
    }
    children = {'Version': ('version', VersionFrame)}


class BuildFrame(EntityFrame):
    entity = 'Build'
    model = Build
    leaves = {'Type': ('build_type', decode_text)}
    children = {'Version': ('version', VersionFrame)}


class AuthorFrame(EntityFrame):
    entity = 'Author'
    model = Author
    leaves = {
        'Name': ('name', decode_text),
        'LangID': ('lang_id', decode_text),
        'PartNumber': ('part_number', decode_text),
    }
    children = {'Build': ('build', BuildFrame)}


class HeartRateFrame(EntityFrame):
    """``<HeartRateBpm><Value>..</Value></HeartRateBpm>`` and its lap variants."""

    leaves = {'Value': ('value', decode_heart_rate)}
    required = ('value',)

    def build(self):
        return self.values['value']


class PositionFrame(EntityFrame):
    entity = 'Position'
    model = Position
    leaves = {
        'LatitudeDegrees': ('latitude_degrees', decode_latitude),
        'LongitudeDegrees': ('longitude_degrees', decode_longitude),
    }
    required = ('latitude_degrees', 'longitude_degrees')


class TrackpointFrame(EntityFrame):
    entity = 'Trackpoint'
    model = Trackpoint
    leaves = {
        'Time': ('time', decode_timestamp),
        'AltitudeMeters': ('altitude_meters', decode_float),
        'DistanceMeters': ('distance_meters', decode_non_negative_float),
        'Cadence': ('cadence', decode_non_negative_int),
        'SensorState': ('sensor_state', enum_decoder(SensorState)),
    }
    children = {
        'Position': ('position', PositionFrame),
        'HeartRateBpm': ('heart_rate_bpm', HeartRateFrame),
        'Extensions': ('extensions', TrackpointExtensionsFrame),
    }
    required = ('time',)


class TrackFrame(EntityFrame):
    entity = 'Track'
    model = Track
    children = {'Trackpoint': ('trackpoints', TrackpointFrame)}
    repeated = ('trackpoints',)


class LapFrame(EntityFrame):
    entity = 'Lap'
    model = Lap
    attributes = {'StartTime': ('start_time', decode_timestamp)}
    leaves = {
        'TotalTimeSeconds': ('total_time_seconds', decode_duration),
        'DistanceMeters': ('distance_meters', decode_non_negative_float),
        'MaximumSpeed': ('maximum_speed', decode_non_negative_float),
        'Calories': ('calories', decode_non_negative_int),
        'Intensity': ('intensity', enum_decoder(Intensity)),
        'Cadence': ('cadence', decode_non_negative_int),
        'TriggerMethod': ('trigger_method', enum_decoder(TriggerMethod)),
        'Notes': ('notes', decode_text),
    }
    children = {
        'AverageHeartRateBpm': ('average_heart_rate_bpm', HeartRateFrame),
        'MaximumHeartRateBpm': ('maximum_heart_rate_bpm', HeartRateFrame),
        'Track': ('tracks', TrackFrame),
        'Extensions': ('extensions', LapExtensionsFrame),
    }
    repeated = ('tracks',)
    required = (
        'start_time',
        'total_time_seconds',
        'distance_meters',
        'calories',
        'intensity',
        'trigger_method',
    )


class ActivityFrame(EntityFrame):
    entity = 'Activity'
    model = Activity
    attributes = {'Sport': ('sport', enum_decoder(Sport))}
    leaves = {
        'Id': ('id', decode_timestamp),
        'Notes': ('notes', decode_text),
    }
    children = {
        'Lap': ('laps', LapFrame),
        'Creator': ('creator', CreatorFrame),
        'Extensions': ('extensions', ExtensionsFrame),
    }
    repeated = ('laps',)
    required = ('sport', 'id')


class ActivitiesFrame(EntityFrame):
    entity = 'Activities'
    model = Activities
    children = {'Activity': ('activities', ActivityFrame)}
    repeated = ('activities',)


class DocumentFrame(EntityFrame):
    entity = 'TrainingCenterDatabase'
    model = Document
    children = {
        'Activities': ('activities', ActivitiesFrame),
        'Author': ('author', AuthorFrame),
    }


class EntityTreeBuilder:
    """Consumes element start/end events and produces a ``Document``.

    One builder serves exactly one document.
    """

    def __init__(self):
        self._stack: List[Frame] = []
        self._result: Optional[Document] = None
        self._done = False

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def path(self) -> Optional[str]:
        """Path of the innermost open frame."""
        if not self._stack:
            return None
        return self._stack[-1].path

    def start(self, tag: str, attrib):
        if self._stack:
            frame = self._stack[-1].open(tag, attrib)
        else:
            if tag != ROOT_TAG:
                raise MissingRequiredField('TrainingCenterDatabase', path=tag)
            frame = DocumentFrame('TrainingCenterDatabase', attrib=attrib)
        self._stack.append(frame)

    def end(self, text: Optional[str]):
        frame = self._stack.pop()
        value: Any = frame.close(text)
        if self._stack:
            self._stack[-1].accept(frame, value)
        else:
            self._result = value
            self._done = True

    def result(self) -> Document:
        if not self._done:
            raise MissingRequiredField('TrainingCenterDatabase', path=self.path)
        return self._result
