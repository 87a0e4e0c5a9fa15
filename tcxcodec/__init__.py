"""
tcx-codec - Training Center XML reader and writer.

This package provides functionality to:
- Decode TCX documents into immutable, typed activity trees
- Decode Garmin ActivityExtension speed, power and cadence values
- Write typed documents back to conformant TCX
- Flatten trackpoints into pandas DataFrames for analysis
"""

__version__ = "1.0.0"

from .exceptions import (
    DecodeError,
    InvalidValue,
    MalformedXml,
    MissingRequiredField,
    SchemaViolation,
    TcxError,
)
from .models import (
    Activities,
    Activity,
    Author,
    Build,
    Creator,
    Document,
    Intensity,
    Lap,
    LapExtensions,
    Position,
    RawExtension,
    SensorState,
    Sport,
    Track,
    Trackpoint,
    TrackpointExtensions,
    TriggerMethod,
    Unrecognized,
    Version,
)
from .parsers.tcx_parser import TcxParser, deserialize
from .serializers.tcx_writer import TcxWriter, serialize
from .analyzers.activity_frame import activity_to_dataframe, summarize_activity

__all__ = [
    'deserialize',
    'serialize',
    'TcxParser',
    'TcxWriter',
    'activity_to_dataframe',
    'summarize_activity',
    'Activities',
    'Activity',
    'Author',
    'Build',
    'Creator',
    'Document',
    'Intensity',
    'Lap',
    'LapExtensions',
    'Position',
    'RawExtension',
    'SensorState',
    'Sport',
    'Track',
    'Trackpoint',
    'TrackpointExtensions',
    'TriggerMethod',
    'Unrecognized',
    'Version',
    'TcxError',
    'DecodeError',
    'MalformedXml',
    'SchemaViolation',
    'MissingRequiredField',
    'InvalidValue',
]
