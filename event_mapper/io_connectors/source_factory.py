import apache_beam as beam


def read_source(p, source_cfg: dict):
    source_type = source_cfg.get("type", "text")

    if source_type == "pubsub":
        subscription = source_cfg.get("subscription")
        if not subscription:
            raise ValueError("source.subscription is required for pubsub")
        return (
            p
            | "ReadPubSub" >> beam.io.ReadFromPubSub(
                subscription=subscription,
                with_attributes=True
            )
        )

    if source_type == "text":
        path = source_cfg.get("path")
        if not path:
            raise ValueError("source.path is required for text")
        return p | "ReadText" >> beam.io.ReadFromText(path)

    raise ValueError(f"Unsupported source type: {source_type}")
