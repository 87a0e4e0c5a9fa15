"""TCX document deserializer."""

import io
import logging
from typing import BinaryIO, Optional, Union

from lxml import etree

from ..config import settings
from ..exceptions import DecodeError, MalformedXml
from ..models.activity import Document
from .builder import EntityTreeBuilder

logger = logging.getLogger(__name__)

Source = Union[bytes, bytearray, memoryview, BinaryIO]


class TcxParser:
    """Parser for Training Center XML documents."""

    def __init__(self, huge_tree: Optional[bool] = None):
        """Initialize TCX parser.

        Args:
            huge_tree: Lift lxml's size limits on text nodes and nesting,
                defaults to settings.HUGE_TREE
        """
        self.huge_tree = settings.HUGE_TREE if huge_tree is None else huge_tree

    def parse(self, source: Source) -> Document:
        """Parse a TCX document in one pass.

        Args:
            source: Readable binary stream or in-memory byte buffer

        Returns:
            Immutable Document

        Raises:
            MalformedXml: Input is not well-formed XML
            MissingRequiredField: A required element or attribute is absent
            InvalidValue: A field's text failed to decode
        """
        stream = self._as_stream(source)
        builder = EntityTreeBuilder()
        events = etree.iterparse(
            stream,
            events=('start', 'end'),
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
            huge_tree=self.huge_tree,
        )

        elem = None
        try:
            for event, elem in events:
                if event == 'start':
                    builder.start(elem.tag, elem.attrib)
                    continue

                builder.end(elem.text)
                # Drop consumed content so the input tree is never retained.
                elem.clear(keep_tail=True)
                while elem.getprevious() is not None:
                    del elem.getparent()[0]
        except etree.XMLSyntaxError as e:
            line, column = getattr(e, 'position', (None, None)) or (None, None)
            logger.error(f"Malformed TCX input: {e}")
            raise MalformedXml(f"Malformed XML: {e.msg or e}", path=builder.path, line=line, column=column)
        except DecodeError as e:
            if e.line is None and elem is not None:
                e.line = elem.sourceline
                e.details['line'] = e.line
            logger.error(f"Failed to decode TCX document: {e}")
            raise

        document = builder.result()
        logger.info(f"Parsed TCX document with {self._count_activities(document)} activities")
        return document

    @staticmethod
    def _as_stream(source: Source):
        if isinstance(source, (bytes, bytearray, memoryview)):
            return io.BytesIO(bytes(source))
        if isinstance(source, str):
            raise TypeError("TCX input must be bytes or a binary stream, not str")
        if not hasattr(source, 'read'):
            raise TypeError(f"Unsupported TCX source type: {type(source).__name__}")
        return source

    @staticmethod
    def _count_activities(document: Document) -> int:
        if document.activities is None:
            return 0
        return len(document.activities.activities)


def deserialize(source: Source) -> Document:
    """Decode a TCX document from bytes or a binary stream."""
    return TcxParser().parse(source)
