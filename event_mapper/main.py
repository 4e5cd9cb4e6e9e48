import apache_beam as beam
from apache_beam.options.pipeline_options import (
    PipelineOptions,
    SetupOptions,
    StandardOptions,
)
import logging
from event_mapper.options import MapperOptions
from event_mapper.config_loader import load_config
from event_mapper.graph_builder import build_pipeline


def run(argv=None):
    logging.getLogger().setLevel(logging.INFO)
    pipeline_options = PipelineOptions(argv)

    custom = pipeline_options.view_as(MapperOptions)

    cfg = {"job_mode": custom.job_mode}
    cfg.update(load_config(custom.config))

    logging.info(f"Loaded config from {custom.config}")

    if custom.job_mode == "streaming":
        pipeline_options.view_as(StandardOptions).streaming = True

    setup = pipeline_options.view_as(SetupOptions)
    setup.save_main_session = True

    with beam.Pipeline(options=pipeline_options) as p:
        build_pipeline(p, cfg)


if __name__ == "__main__":
    run()
