from apache_beam.options.pipeline_options import PipelineOptions

class MapperOptions(PipelineOptions):
    @classmethod
    def _add_argparse_args(cls, parser):
        # Config
        parser.add_argument(
            "--config",
            required=True,
            help="Mapper YAML config, local path or gs://bucket/object"
        )

        # Job mode
        parser.add_argument(
            "--job_mode",
            default="batch",
            choices=["streaming", "batch"],
            help="Execution mode"
        )
