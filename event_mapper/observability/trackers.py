import apache_beam as beam
from event_mapper.observability.metrics import PipelineMetrics

class TrackInput(beam.DoFn):
    """Counts raw messages as they come off the source."""

    def process(self, element):
        PipelineMetrics.records_in.inc()
        yield element

class TrackOutput(beam.DoFn):
    """
    Counts attribute dicts headed for the sink. Records that matched none of
    the mapped fields still go out as {} and are also counted as empty.
    """

    def process(self, event_attr):
        PipelineMetrics.records_out.inc()
        if not event_attr:
            PipelineMetrics.empty_outputs.inc()
        yield event_attr
