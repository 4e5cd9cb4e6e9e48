import apache_beam as beam
import json


def write_sink(pcoll, sink_cfg: dict):
    sink_type = sink_cfg.get("type", "text")
    as_json = pcoll | "AttrsToJson" >> beam.Map(json.dumps, default=str)

    if sink_type == "pubsub":
        topic = sink_cfg.get("topic")
        if not topic:
            raise ValueError("sink.topic is required for pubsub")
        return (
            as_json
            | "AttrsToBytes" >> beam.Map(lambda s: s.encode("utf-8"))
            | "WritePubSub" >> beam.io.WriteToPubSub(topic)
        )

    if sink_type == "text":
        path = sink_cfg.get("path")
        if not path:
            raise ValueError("sink.path is required for text")
        return as_json | "WriteText" >> beam.io.WriteToText(path)

    raise ValueError(f"Unsupported sink type: {sink_type}")
