"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidArgumentError(DomainException):
    """Caller supplied a parameter outside its accepted range"""

    pass


class MalformedRecordError(DomainException):
    """A single obligation-source record cannot be resolved"""

    def __init__(self, source: str, record_id: str, reason: str):
        super().__init__(f"{source} record {record_id!r} skipped: {reason}")
        self.source = source
        self.record_id = record_id
        self.reason = reason
