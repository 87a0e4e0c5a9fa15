"""Partial-entity frames used by the entity tree builder.

A frame is pushed for every element start and popped at its end. The frame
on top of the stack decides what its children become (``open``), receives
each finished child value (``accept``) and turns itself into a typed value
once its element closes (``close``).
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from ..exceptions import InvalidValue, MissingRequiredField
from ..models.namespaces import TCX_NS, split_qname

logger = logging.getLogger(__name__)


class Frame:
    """Base frame. Subclasses override ``open``/``accept``/``close``."""

    entity = None

    def __init__(self, path: str, field: Optional[str] = None, name: Optional[str] = None):
        self.path = path
        self.field = field
        self.name = name
        if self.entity is None:
            self.entity = name

    def open(self, tag: str, attrib) -> 'Frame':
        logger.debug(f"Skipping unknown element {tag} in {self.path}")
        return SkipFrame(self.path)

    def accept(self, child: 'Frame', value: Any):
        pass

    def close(self, text: Optional[str]) -> Any:
        return None

    def decode(self, field: str, decoder: Callable, text: Optional[str]) -> Any:
        """Run ``decoder`` on ``text``, reporting failures against this entity."""
        try:
            return decoder(text)
        except ValueError as e:
            raise InvalidValue(f"{self.entity}.{field}", text, str(e), self.path)


class SkipFrame(Frame):
    """Unknown element; its whole subtree is ignored."""

    def open(self, tag, attrib):
        return SkipFrame(self.path)


class LeafFrame(Frame):
    """Scalar element decoded from its text on close."""

    def __init__(self, owner: Frame, field: str, decoder: Callable):
        super().__init__(owner.path, field)
        self.owner = owner
        self.decoder = decoder

    def open(self, tag, attrib):
        return SkipFrame(self.path)

    def close(self, text):
        return self.owner.decode(self.field, self.decoder, text)


class EntityFrame(Frame):
    """Frame for a TCX entity described by class-level tables.

    ``attributes``: XML attribute name -> (field, decoder)
    ``leaves``: child local name -> (field, decoder)
    ``children``: child local name -> (field, frame class)
    ``repeated``: fields accumulated in document order
    ``required``: fields that must be set when the element closes
    """

    model = None
    attributes: Dict[str, Tuple[str, Callable]] = {}
    leaves: Dict[str, Tuple[str, Callable]] = {}
    children: Dict[str, Tuple[str, type]] = {}
    repeated: Tuple[str, ...] = ()
    required: Tuple[str, ...] = ()

    def __init__(self, path, field=None, name=None, attrib=None):
        super().__init__(path, field, name)
        self.values: Dict[str, Any] = {}
        self._counts: Dict[str, int] = {}
        for field_name in self.repeated:
            self.values[field_name] = []
        if attrib is not None:
            for attr_name, (field_name, decoder) in self.attributes.items():
                if attr_name in attrib:
                    self.values[field_name] = self.decode(field_name, decoder, attrib[attr_name])

    def child_path(self, local: str, field: str) -> str:
        if field in self.repeated:
            index = self._counts.get(local, 0)
            self._counts[local] = index + 1
            return f"{self.path}/{local}[{index}]"
        return f"{self.path}/{local}"

    def open(self, tag, attrib):
        namespace, local = split_qname(tag)
        if namespace == TCX_NS:
            if local in self.leaves:
                field, decoder = self.leaves[local]
                return LeafFrame(self, field, decoder)
            if local in self.children:
                field, frame_cls = self.children[local]
                return frame_cls(self.child_path(local, field), field=field, name=local, attrib=attrib)
        return super().open(tag, attrib)

    def accept(self, child, value):
        if child.field is None:
            return
        if child.field in self.repeated:
            self.values[child.field].append(value)
        else:
            self.values[child.field] = value

    def close(self, text):
        for field in self.required:
            if field not in self.values:
                raise MissingRequiredField(f"{self.entity}.{field}", self.path)
        return self.build()

    def build(self):
        values = {
            key: tuple(value) if key in self.repeated else value
            for key, value in self.values.items()
        }
        return self.model(**values)
