# src/srdn/engine/errors.py


class EngineError(ValueError):
    """A stylesheet could not be processed.

    Carries the source location when one is known.
    """

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.message = message
        self.filename = filename
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.filename is None:
            return self.message
        location = self.filename
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        return f"{location}: {self.message}"


class ParseError(EngineError):
    """The stylesheet is not valid CSS."""


class BundleError(EngineError):
    """An @import could not be resolved while bundling."""


class PatternParseError(ValueError):
    """A CSS modules naming pattern is malformed."""
