class EventMapperError(Exception):
    """Base class for errors raised by the event mapper."""


class DefinitionError(EventMapperError, ValueError):
    """
    The event mapping definition is malformed or mistyped.

    Raised once, when a converter is constructed. `problems` lists every
    offending entry found during validation.
    """

    def __init__(self, message, problems=None):
        super().__init__(message)
        self.problems = list(problems or [])


class RecordShapeError(EventMapperError, TypeError):
    """The top-level record value cannot be traversed as a mapping."""

    def __init__(self, value):
        self.value_type = type(value).__name__
        super().__init__(
            f"Record value must be a mapping, got {self.value_type}"
        )
