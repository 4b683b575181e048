#!/usr/bin/env python3


class ExtractionError(Exception):
    """Base class for everything that aborts the extraction of a statement."""


class StructureError(ExtractionError):
    """A required XML element is missing."""


class FormatError(ExtractionError):
    """An element's text does not parse as the expected value."""


class MissingFieldError(ExtractionError):
    """A field was never observed while scanning a transaction detail."""

    def __init__(self, field: str) -> None:
        super().__init__(f"did not find {field}")
        self.field = field
