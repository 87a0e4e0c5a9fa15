"""Functions for writing TCX documents from the typed model."""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Optional

import lxml.etree

from ..config import settings
from ..models.activity import (
    Activity,
    Author,
    Creator,
    Document,
    Lap,
    RawExtension,
    Trackpoint,
    Version,
)
from ..models.enums import Unrecognized
from ..models.namespaces import (
    ACTIVITY_EXTENSION_NS,
    TCX_NS,
    TCX_SCHEMALOCATION,
    XSI_NS,
    qname,
)
from ..parsers.extensions import LAP_EXTENSION, TRACKPOINT_EXTENSION, ExtensionSchema

logger = logging.getLogger(__name__)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 text keeping the original offset; UTC is written as ``Z``."""
    text = value.isoformat()
    if value.utcoffset() == timedelta(0) and text.endswith('+00:00'):
        text = text[:-len('+00:00')] + 'Z'
    return text


def format_float(value: float) -> str:
    return repr(float(value))


def format_enum(value) -> str:
    if isinstance(value, (Enum, Unrecognized)):
        return value.value
    return str(value)


def format_value(value) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, (Enum, Unrecognized)):
        return format_enum(value)
    return str(value)


class TcxWriter:
    """Renders a Document as TCX bytes."""

    def __init__(self, pretty_print: Optional[bool] = None, extension_prefix: Optional[str] = None):
        self.pretty_print = settings.PRETTY_PRINT if pretty_print is None else pretty_print
        self.extension_prefix = extension_prefix or settings.EXTENSION_PREFIX
        self.nsmap = {
            None: TCX_NS,
            self.extension_prefix: ACTIVITY_EXTENSION_NS,
            'xsi': XSI_NS,
        }

    def write(self, document: Document) -> bytes:
        root = self.document_to_element(document)
        data = lxml.etree.tostring(
            root,
            xml_declaration=True,
            encoding=settings.OUTPUT_ENCODING,
            pretty_print=self.pretty_print,
        )
        logger.info(f"Serialized TCX document ({len(data)} bytes)")
        return data

    def document_to_element(self, document: Document) -> lxml.etree._Element:
        root = lxml.etree.Element(
            qname(TCX_NS, 'TrainingCenterDatabase'),
            attrib={qname(XSI_NS, 'schemaLocation'): TCX_SCHEMALOCATION},
            nsmap=self.nsmap,
        )
        if document.activities is not None:
            activities = _sub(root, 'Activities')
            for activity in document.activities.activities:
                self._add_activity(activities, activity)
        if document.author is not None:
            self._add_author(root, document.author)
        return root

    def _add_activity(self, parent, activity: Activity):
        elem = _sub(parent, 'Activity', attrib={'Sport': format_enum(activity.sport)})
        _leaf(elem, 'Id', activity.id)
        for lap in activity.laps:
            self._add_lap(elem, lap)
        _leaf(elem, 'Notes', activity.notes)
        if activity.creator is not None:
            self._add_creator(elem, activity.creator)
        if activity.extensions:
            self._add_raw_extensions(_sub(elem, 'Extensions'), activity.extensions)

    def _add_lap(self, parent, lap: Lap):
        elem = _sub(parent, 'Lap', attrib={'StartTime': format_timestamp(lap.start_time)})
        _leaf(elem, 'TotalTimeSeconds', lap.total_time_seconds)
        _leaf(elem, 'DistanceMeters', lap.distance_meters)
        _leaf(elem, 'MaximumSpeed', lap.maximum_speed)
        _leaf(elem, 'Calories', lap.calories)
        _heart_rate(elem, 'AverageHeartRateBpm', lap.average_heart_rate_bpm)
        _heart_rate(elem, 'MaximumHeartRateBpm', lap.maximum_heart_rate_bpm)
        _leaf(elem, 'Intensity', lap.intensity)
        _leaf(elem, 'Cadence', lap.cadence)
        _leaf(elem, 'TriggerMethod', lap.trigger_method)
        for track in lap.tracks:
            track_elem = _sub(elem, 'Track')
            for trackpoint in track.trackpoints:
                self._add_trackpoint(track_elem, trackpoint)
        _leaf(elem, 'Notes', lap.notes)
        if not lap.extensions.is_empty:
            self._add_extensions(elem, lap.extensions, LAP_EXTENSION)

    def _add_trackpoint(self, parent, trackpoint: Trackpoint):
        elem = _sub(parent, 'Trackpoint')
        _leaf(elem, 'Time', trackpoint.time)
        if trackpoint.position is not None:
            position = _sub(elem, 'Position')
            _leaf(position, 'LatitudeDegrees', trackpoint.position.latitude_degrees)
            _leaf(position, 'LongitudeDegrees', trackpoint.position.longitude_degrees)
        _leaf(elem, 'AltitudeMeters', trackpoint.altitude_meters)
        _leaf(elem, 'DistanceMeters', trackpoint.distance_meters)
        _heart_rate(elem, 'HeartRateBpm', trackpoint.heart_rate_bpm)
        _leaf(elem, 'Cadence', trackpoint.cadence)
        _leaf(elem, 'SensorState', trackpoint.sensor_state)
        if not trackpoint.extensions.is_empty:
            self._add_extensions(elem, trackpoint.extensions, TRACKPOINT_EXTENSION)

    def _add_extensions(self, parent, bag, schema: ExtensionSchema):
        """Write typed fields into the schema's container, then raw leftovers.

        Raw triples in the container's namespace go back inside the container.
        """
        extensions = _sub(parent, 'Extensions')
        inside = [raw for raw in bag.raw if raw.namespace == schema.namespace]
        outside = [raw for raw in bag.raw if raw.namespace != schema.namespace]

        values = [(local, getattr(bag, field)) for local, (field, _) in schema.fields.items()]
        if inside or any(value is not None for _, value in values):
            container = lxml.etree.SubElement(extensions, qname(schema.namespace, schema.container))
            for local, value in values:
                if value is not None:
                    child = lxml.etree.SubElement(container, qname(schema.namespace, local))
                    child.text = format_value(value)
            self._add_raw_extensions(container, inside)
        self._add_raw_extensions(extensions, outside)

    @staticmethod
    def _add_raw_extensions(parent, raws: Iterable[RawExtension]):
        for raw in raws:
            child = lxml.etree.SubElement(parent, qname(raw.namespace, raw.name))
            child.text = raw.text

    def _add_creator(self, parent, creator: Creator):
        elem = _sub(parent, 'Creator', attrib={qname(XSI_NS, 'type'): 'Device_t'})
        _leaf(elem, 'Name', creator.name)
        _leaf(elem, 'UnitId', creator.unit_id)
        _leaf(elem, 'ProductID', creator.product_id)
        _version(elem, creator.version)

    def _add_author(self, parent, author: Author):
        elem = _sub(parent, 'Author', attrib={qname(XSI_NS, 'type'): 'Application_t'})
        _leaf(elem, 'Name', author.name)
        if author.build is not None:
            build = _sub(elem, 'Build')
            _version(build, author.build.version)
            _leaf(build, 'Type', author.build.build_type)
        _leaf(elem, 'LangID', author.lang_id)
        _leaf(elem, 'PartNumber', author.part_number)


def _sub(parent, name: str, attrib=None):
    return lxml.etree.SubElement(parent, qname(TCX_NS, name), attrib=attrib)


def _leaf(parent, name: str, value):
    """Append ``<name>value</name>`` unless the value is absent."""
    if value is None:
        return None
    elem = _sub(parent, name)
    elem.text = format_value(value)
    return elem


def _heart_rate(parent, name: str, value: Optional[int]):
    if value is None:
        return
    _leaf(_sub(parent, name), 'Value', value)


def _version(parent, version: Optional[Version]):
    if version is None:
        return
    elem = _sub(parent, 'Version')
    _leaf(elem, 'VersionMajor', version.version_major)
    _leaf(elem, 'VersionMinor', version.version_minor)
    _leaf(elem, 'BuildMajor', version.build_major)
    _leaf(elem, 'BuildMinor', version.build_minor)


def serialize(document: Document) -> bytes:
    """Render a Document as UTF-8 TCX bytes."""
    return TcxWriter().write(document)
