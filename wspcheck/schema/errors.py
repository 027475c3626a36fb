# wspcheck/schema/errors.py
from __future__ import annotations


class SchemaError(ValueError):
    """Base class for anything wrong with a storage-schemas policy."""


class InvalidDuration(SchemaError):
    pass


class InvalidRetentionList(SchemaError):
    pass


class InvalidRetentionPair(InvalidRetentionList):
    pass


class InvalidPattern(SchemaError):
    def __init__(self, section: str, pattern: str, cause: Exception):
        self.section = section
        self.pattern = pattern
        self.cause = cause
        super().__init__(f"failed compiling pattern {pattern!r} in section [{section}]: {cause}")


class InvalidRetentions(InvalidRetentionList):
    def __init__(self, section: str, cause: Exception):
        self.section = section
        self.cause = cause
        super().__init__(f"failed parsing retentions in section [{section}]: {cause}")


class InvalidEncoding(SchemaError):
    def __init__(self, path: str, cause: UnicodeDecodeError):
        self.path = path
        self.cause = cause
        super().__init__(f"{path} is not valid UTF-8: {cause}")
