from apache_beam.metrics import Metrics

class PipelineMetrics:
    """
    Centralized metrics registry for the event mapper pipeline.
    """

    # Throughput
    records_in = Metrics.counter("pipeline", "records_in")
    records_out = Metrics.counter("pipeline", "records_out")

    # Errors
    decode_errors = Metrics.counter("errors", "decode_errors")
    shape_errors = Metrics.counter("errors", "shape_errors")
    extract_errors = Metrics.counter("errors", "extract_errors")

    # Records whose value matched none of the mapped fields
    empty_outputs = Metrics.counter("mapper", "empty_outputs")

    # DLQ
    dlq_events = Metrics.counter("dlq", "events_total")

    @staticmethod
    def stage_error(stage: str):
        return Metrics.counter("stage_errors", stage)
