import apache_beam as beam
import json
import logging

from event_mapper.errors.exceptions import RecordShapeError
from event_mapper.mapper.converter import SchemalessEventAttrConverter
from event_mapper.observability.metrics import PipelineMetrics


class ExtractAttributes(beam.DoFn):
    """
    Applies a SchemalessEventAttrConverter to every SinkRecord.

    The converter is built here, so a bad event mapping fails while the
    pipeline graph is being constructed rather than on the workers.
    """

    def __init__(self, event_mapping):
        # config blocks arrive either as a JSON string or as a loaded YAML mapping
        if isinstance(event_mapping, (str, bytes, bytearray)):
            self.converter = SchemalessEventAttrConverter(event_mapping)
        else:
            self.converter = SchemalessEventAttrConverter.from_mapping(event_mapping)

    def _to_dlq(self, record, error):
        key = getattr(record, "key", None)
        value = getattr(record, "value", record)
        logging.error(json.dumps({
            "severity": "ERROR",
            "stage": "extract",
            "error": error,
            "key": key,
            "offset": getattr(record, "offset", None),
        }))
        return beam.pvalue.TaggedOutput("dlq", {
            "stage": "extract",
            "error": error,
            "key": key,
            "raw": str(value)[:500],
        })

    def process(self, record):
        try:
            event_attr = self.converter.convert(record)
        except RecordShapeError as e:
            PipelineMetrics.shape_errors.inc()
            PipelineMetrics.stage_error("extract").inc()
            yield self._to_dlq(record, str(e))
            return
        except Exception as e:
            PipelineMetrics.extract_errors.inc()
            PipelineMetrics.stage_error("extract").inc()
            yield self._to_dlq(record, f"Extraction failed: {str(e)}")
            return

        if not event_attr:
            logging.info(f"No mapped fields found in record key: {record.key}")

        yield event_attr
