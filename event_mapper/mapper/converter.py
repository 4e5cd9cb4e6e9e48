from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Dict

from event_mapper.errors.exceptions import RecordShapeError
from event_mapper.mapper.definition import parse_definition, read_only, validate_definition
from event_mapper.mapper.path_resolver import resolve
from event_mapper.mapper.records import SinkRecord


class EventAttrConverter(ABC):
    """Converts a SinkRecord into a flat event attribute dict."""

    @abstractmethod
    def convert(self, record: SinkRecord) -> Dict[str, Any]:
        ...


class SchemalessEventAttrConverter(EventAttrConverter):
    """
    Converts a record using a JSON definition of where each event attribute
    lives in the nested record value.

    The definition format is {eventAttr: [hierarchical keys to the value]}, e.g.
    {"message": ["message"], "logfile": ["log", "file", "path"],
     "serverHost": ["host", "hostname"], "parser": ["fields", "parser"]}

    Fields of the record that no path names are dropped.
    """

    def __init__(self, event_mapping_json: str = None, *, _event_mapping=None):
        if _event_mapping is None:
            _event_mapping = parse_definition(event_mapping_json)
        self._event_mapping = _event_mapping

    @classmethod
    def from_mapping(cls, mapping) -> "SchemalessEventAttrConverter":
        """Build from an already-loaded mapping, e.g. a YAML config block."""
        return cls(_event_mapping=validate_definition(mapping))

    @property
    def event_mapping(self):
        return read_only(self._event_mapping)

    def extract(self, record_value) -> Dict[str, Any]:
        if not isinstance(record_value, Mapping):
            raise RecordShapeError(record_value)

        event_attr = {}
        for attr, keys in self._event_mapping.items():
            value = resolve(record_value, keys)
            if value is not None:
                event_attr[attr] = value
        return event_attr

    def convert(self, record: SinkRecord) -> Dict[str, Any]:
        return self.extract(record.value)

    def __repr__(self):
        return f"{type(self).__name__}({sorted(self._event_mapping)!r})"


AttributeExtractor = SchemalessEventAttrConverter
