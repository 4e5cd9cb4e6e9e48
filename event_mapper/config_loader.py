import yaml
from pathlib import Path
from google.cloud import storage


REQUIRED_BLOCKS = ["event_mapping", "source", "sink", "dlq"]


def _read_text(path: str) -> str:
    if path.startswith("gs://"):
        bucket_name, _, blob_name = path[len("gs://"):].partition("/")
        if not bucket_name or not blob_name:
            raise ValueError(f"Invalid GCS path: {path}")

        client = storage.Client()
        blob = client.bucket(bucket_name).blob(blob_name)
        if not blob.exists():
            raise FileNotFoundError(
                f"Required config '{blob_name}' not found in gs://{bucket_name}"
            )
        return blob.download_as_text()

    if not Path(path).exists():
        raise FileNotFoundError(f"Config not found at: {path}")

    with open(path, "r") as f:
        return f.read()


def load_config(path: str) -> dict:
    """
    Loads the mapper config (local path or gs://bucket/object):

      event_mapping: {attr: [keys...]}   # or the same as a JSON string
      source: {type: text|pubsub, path|subscription}
      sink:   {type: text|pubsub, path|topic}
      dlq:    {path|topic}
      record_value_field: payload        # optional

    Returns the config dict.
    """
    cfg = yaml.safe_load(_read_text(path))
    if not cfg:
        raise ValueError(f"Config '{path}' loaded as empty")
    if not isinstance(cfg, dict):
        raise ValueError(f"Config '{path}' must be a mapping")

    for block in REQUIRED_BLOCKS:
        if block not in cfg:
            raise KeyError(f"config missing required block: '{block}'")

    source = cfg["source"]
    if source.get("type", "text") == "pubsub":
        if "subscription" not in source:
            raise KeyError("source.subscription is required")
    elif "path" not in source:
        raise KeyError("source.path is required")

    sink = cfg["sink"]
    if sink.get("type", "text") == "pubsub":
        if "topic" not in sink:
            raise KeyError("sink.topic is required")
    elif "path" not in sink:
        raise KeyError("sink.path is required")

    if "topic" not in cfg["dlq"] and "path" not in cfg["dlq"]:
        raise KeyError("dlq.topic or dlq.path is required")

    return cfg

