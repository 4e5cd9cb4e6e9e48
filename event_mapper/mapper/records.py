class SinkRecord:
    """
    A single record handed to a converter.

    Only `value` is read by the mapper; topic, partition, offset, key,
    headers and timestamp belong to the transport and are carried through
    untouched.
    """

    __slots__ = ("topic", "partition", "offset", "key", "value", "headers", "timestamp")

    def __init__(self, value, topic=None, partition=None, offset=None,
                 key=None, headers=None, timestamp=None):
        self.value = value
        self.topic = topic
        self.partition = partition
        self.offset = offset
        self.key = key
        self.headers = dict(headers or {})
        self.timestamp = timestamp

    def __getstate__(self):
        return {slot: getattr(self, slot) for slot in self.__slots__}

    def __setstate__(self, state):
        for slot, value in state.items():
            setattr(self, slot, value)

    def __eq__(self, other):
        if not isinstance(other, SinkRecord):
            return NotImplemented
        return self.__getstate__() == other.__getstate__()

    def __repr__(self):
        return (
            f"SinkRecord(topic={self.topic!r}, partition={self.partition!r}, "
            f"offset={self.offset!r}, key={self.key!r})"
        )
