"""
Errors raised while turning a schema into generated code.

Every error here is fatal for the whole run: generation never emits partial
output.
"""


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class InvalidValueError(GeneratorError):
    """A static event value carries no usable literal payload."""

    def __init__(self, parameter_name: str, reason: str = "no value set"):
        self.parameter_name = parameter_name
        super().__init__(
            f"Invalid publish parameter value. Parameter: {parameter_name} ({reason})"
        )


class InvalidEventTypeError(GeneratorError):
    """The event_type value of an event is not a string-enum member."""

    def __init__(self, event_name: str, reason: str = "must have a string enum value"):
        self.event_name = event_name
        super().__init__(f"Event {event_name}: event_type {reason}")


class MissingEventTypeError(GeneratorError):
    """An event has no event_type value but a publish event is required."""

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(f"Event {event_name} does not contain an event_type value")


class DuplicateIdentifierError(GeneratorError):
    """Two schema names collapse into the same generated identifier."""

    def __init__(self, scope: str, identifier: str):
        self.scope = scope
        self.identifier = identifier
        super().__init__(f"Duplicate identifier '{identifier}' in {scope}")
