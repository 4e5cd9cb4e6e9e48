import apache_beam as beam
from event_mapper.observability.metrics import PipelineMetrics
import json
from datetime import datetime
from apache_beam.utils.timestamp import Timestamp


def dlq_to_json(event):
    """Convert a DLQ event dict to JSON, stringifying anything json can't."""

    def json_serializable(obj):
        if isinstance(obj, Timestamp):
            return obj.to_rfc3339()

        if isinstance(obj, datetime):
            return obj.isoformat()

        if isinstance(obj, bytes):
            return obj.decode("utf-8", errors="replace")

        return str(obj)

    return json.dumps(event, default=json_serializable, sort_keys=True)


class WriteDLQ(beam.PTransform):
    """Writes failed records to a Pub/Sub topic or to text files."""

    def __init__(self, dlq_cfg: dict):
        if not dlq_cfg or not (dlq_cfg.get("topic") or dlq_cfg.get("path")):
            raise ValueError("DLQ topic or path must be provided")
        self.topic = dlq_cfg.get("topic")
        self.path = dlq_cfg.get("path")

    def expand(self, pcoll):
        as_json = (
            pcoll
            | "CountDLQ" >> beam.Map(self._count)
            | "DLQToJson" >> beam.Map(dlq_to_json)
        )
        if self.topic:
            return (
                as_json
                | "DLQToBytes" >> beam.Map(lambda s: s.encode("utf-8"))
                | "WriteDLQToPubSub" >> beam.io.WriteToPubSub(self.topic)
            )
        return as_json | "WriteDLQToText" >> beam.io.WriteToText(self.path)

    @staticmethod
    def _count(event):
        PipelineMetrics.dlq_events.inc()
        stage = event.get("stage", "unknown")
        PipelineMetrics.stage_error(stage).inc()
        return event
