import apache_beam as beam
import json
import base64
import logging
from apache_beam.io.gcp.pubsub import PubsubMessage

from event_mapper.mapper.records import SinkRecord
from event_mapper.observability.metrics import PipelineMetrics


def _loads(element_str: str):
    try:
        return json.loads(element_str)
    except json.JSONDecodeError:
        decoded = json.loads(base64.b64decode(element_str, validate=True).decode("utf-8"))
        logging.info("Decoded base64-encoded JSON record")
        return decoded


class DecodeRecord(beam.DoFn):
    """
    Turns a raw message into a SinkRecord.

    Accepts PubsubMessage, bytes, str or an already-decoded dict. JSON text is
    tried first, then base64-encoded JSON. When `value_field` is set, the
    record value is that field of the decoded message instead of the whole
    message.
    """

    def __init__(self, value_field=None, topic=None):
        self.value_field = value_field
        self.topic = topic

    def process(self, element):
        try:
            key = None
            headers = {}
            timestamp = None

            if isinstance(element, PubsubMessage):
                element_str = element.data.decode("utf-8")
                key = element.message_id
                headers = dict(element.attributes or {})
                timestamp = (
                    element.publish_time.isoformat()
                    if element.publish_time
                    else None
                )
            elif isinstance(element, bytes):
                element_str = element.decode("utf-8")
            elif isinstance(element, str):
                element_str = element
            elif isinstance(element, dict):
                element_str = None
                message = element
            else:
                raise ValueError(f"Unsupported input type: {type(element)}")

            if element_str is not None:
                message = _loads(element_str)

            value = message
            if self.value_field:
                if not isinstance(message, dict) or self.value_field not in message:
                    raise ValueError(f"Missing record value field: {self.value_field}")
                value = message[self.value_field]
                # envelopes sometimes carry the value as a JSON string
                if isinstance(value, str):
                    value = _loads(value)

            yield SinkRecord(
                value,
                topic=self.topic,
                key=key,
                headers=headers,
                timestamp=timestamp,
            )

        except Exception as e:
            PipelineMetrics.decode_errors.inc()
            PipelineMetrics.stage_error("decode").inc()

            logging.error(json.dumps({
                "severity": "ERROR",
                "stage": "decode",
                "error": str(e),
                "raw": str(element)[:500],
            }))

            yield beam.pvalue.TaggedOutput(
                "dlq",
                {
                    "stage": "decode",
                    "error": f"Decode failed: {str(e)}",
                    "raw": str(element)[:500],
                },
            )
