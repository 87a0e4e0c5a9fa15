"""Extension resolver for vendor elements under ``<Extensions>``.

Recognized containers (``TPX`` on trackpoints, ``LX`` on laps, both in the
Garmin ActivityExtension v2 namespace) are decoded into typed fields. Any
other extension content is kept as raw ``(namespace, name, text)`` triples,
one per leaf element, so nothing is dropped.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..models.activity import LapExtensions, RawExtension, TrackpointExtensions
from ..models.namespaces import ACTIVITY_EXTENSION_NS, split_qname
from .decoders import decode_non_negative_float, decode_non_negative_int
from .frames import Frame, LeafFrame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtensionSchema:
    """Typed children of one extension container.

    ``fields`` maps child local name -> (model field, decoder), in the order
    the writer emits them.
    """

    namespace: str
    container: str
    fields: Dict[str, Tuple[str, Callable]]

    def field_for(self, namespace: Optional[str], local: str) -> Optional[Tuple[str, Callable]]:
        if namespace != self.namespace:
            return None
        return self.fields.get(local)


TRACKPOINT_EXTENSION = ExtensionSchema(ACTIVITY_EXTENSION_NS, 'TPX', {
    'Speed': ('speed_meters_per_second', decode_non_negative_float),
    'RunCadence': ('run_cadence', decode_non_negative_int),
    'Watts': ('watts', decode_non_negative_int),
})

LAP_EXTENSION = ExtensionSchema(ACTIVITY_EXTENSION_NS, 'LX', {
    'AvgSpeed': ('avg_speed', decode_non_negative_float),
    'MaxBikeCadence': ('max_bike_cadence', decode_non_negative_int),
    'AvgRunCadence': ('avg_run_cadence', decode_non_negative_int),
    'MaxRunCadence': ('max_run_cadence', decode_non_negative_int),
    'Steps': ('steps', decode_non_negative_int),
    'AvgWatts': ('avg_watts', decode_non_negative_int),
    'MaxWatts': ('max_watts', decode_non_negative_int),
})


class ExtensionResolver:
    """Maps extension containers to schemas and assembles the owner's bag."""

    def __init__(self, schemas=(), bag_type=None):
        self._schemas = {(schema.namespace, schema.container): schema for schema in schemas}
        self.bag_type = bag_type

    def resolve(self, tag: str) -> Optional[ExtensionSchema]:
        return self._schemas.get(split_qname(tag))

    def build(self, values: Dict, raw: List[RawExtension]):
        if self.bag_type is None:
            return tuple(raw)
        return self.bag_type(raw=tuple(raw), **values)


TRACKPOINT_RESOLVER = ExtensionResolver([TRACKPOINT_EXTENSION], TrackpointExtensions)
LAP_RESOLVER = ExtensionResolver([LAP_EXTENSION], LapExtensions)
# Activity-level extensions have no typed fields, everything stays raw.
ACTIVITY_RESOLVER = ExtensionResolver()


class RawCaptureFrame(Frame):
    """Unrecognized extension element; leaves are appended to ``sink`` on close."""

    def __init__(self, path, tag, sink):
        super().__init__(path)
        self.namespace, self.local = split_qname(tag)
        self.sink = sink
        self.has_children = False

    def open(self, tag, attrib):
        self.has_children = True
        return RawCaptureFrame(self.path, tag, self.sink)

    def close(self, text):
        # Container text is kept only when it is more than indentation; it
        # follows the container's own leaves in the sink.
        if not self.has_children:
            self.sink.append(RawExtension(self.namespace, self.local, text or ''))
        elif text and text.strip():
            self.sink.append(RawExtension(self.namespace, self.local, text))
        return None


class ExtensionContainerFrame(Frame):
    """A recognized container such as ``ns3:TPX``."""

    def __init__(self, path, schema: ExtensionSchema, values, raw):
        super().__init__(path, name=schema.container)
        self.schema = schema
        self.values = values
        self.raw = raw

    def open(self, tag, attrib):
        namespace, local = split_qname(tag)
        known = self.schema.field_for(namespace, local)
        if known is None:
            logger.debug(f"Keeping raw extension {tag} in {self.path}")
            return RawCaptureFrame(self.path, tag, self.raw)
        field, decoder = known
        return LeafFrame(self, field, decoder)

    def accept(self, child, value):
        if child.field is not None:
            self.values[child.field] = value


class ExtensionsFrame(Frame):
    """``<Extensions>`` element; delegates to a resolver for its owner type."""

    resolver = ACTIVITY_RESOLVER

    def __init__(self, path, field=None, name=None, attrib=None):
        super().__init__(path, field, name)
        self.values = {}
        self.raw: List[RawExtension] = []

    def open(self, tag, attrib):
        schema = self.resolver.resolve(tag)
        if schema is not None:
            return ExtensionContainerFrame(self.path, schema, self.values, self.raw)
        return RawCaptureFrame(self.path, tag, self.raw)

    def close(self, text):
        return self.resolver.build(self.values, self.raw)


class TrackpointExtensionsFrame(ExtensionsFrame):
    resolver = TRACKPOINT_RESOLVER


class LapExtensionsFrame(ExtensionsFrame):
    resolver = LAP_RESOLVER
