"""Error types raised by the RIVL importer."""


class RivlError(Exception):
    """Base class for every error raised while importing a RIVL model."""


class FormatError(RivlError, ValueError):
    """Raised when the document does not have the expected shape."""


class ContractViolationError(FormatError):
    """Raised when a declaration breaks a guarantee of the format.

    Missing mandatory attributes, references to placeholders or to indices
    that were never declared, and array ranges that run past the end of
    the binary file all end up here.
    """

    def __init__(self, message, index=None):
        if index is not None:
            message = f"declaration #{index}: {message}"
        super().__init__(message)
        self.index = index


class KindMismatchError(ContractViolationError):
    """Raised when a table entry is not of the node kind a reference needs."""

    def __init__(self, expected, found, index=None):
        super().__init__(f"expected {expected} but found {found}", index)
        self.expected = expected
        self.found = found


class BlobError(RivlError, OSError):
    """Raised when the companion binary file cannot be opened or sized."""
