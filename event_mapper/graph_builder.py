import apache_beam as beam
import logging

from event_mapper.errors.dlq import WriteDLQ
from event_mapper.io_connectors.sink_writer import write_sink
from event_mapper.io_connectors.source_factory import read_source
from event_mapper.observability.trackers import TrackInput, TrackOutput
from event_mapper.transforms.extract_attributes import ExtractAttributes
from event_mapper.transforms.preprocess import DecodeRecord


def build_pipeline(p, cfg):
    logging.info(f"PIPELINE MODE = {cfg.get('job_mode')}")

    # ==================================================
    # 1. Read + Decode
    # ==================================================
    decoded = (
        read_source(p, cfg["source"])
        | "TrackInput" >> beam.ParDo(TrackInput())
        | "DecodeRecord"
        >> beam.ParDo(
            DecodeRecord(
                value_field=cfg.get("record_value_field"),
                topic=cfg["source"].get("subscription") or cfg["source"].get("path"),
            )
        ).with_outputs("dlq", main="main")
    )

    # ==================================================
    # 2. Extract event attributes
    # ==================================================
    extracted = (
        decoded.main
        | "ExtractAttributes"
        >> beam.ParDo(
            ExtractAttributes(cfg["event_mapping"])
        ).with_outputs("dlq", main="main")
    )

    # ==================================================
    # 3. Sink
    # ==================================================
    main = extracted.main | "TrackOutput" >> beam.ParDo(TrackOutput())
    write_sink(main, cfg["sink"])

    # ==================================================
    # 4. DLQ
    # ==================================================
    (
        (decoded.dlq, extracted.dlq)
        | "FlattenDLQ" >> beam.Flatten()
        | "WriteDLQ" >> WriteDLQ(cfg["dlq"])
    )

    return main
