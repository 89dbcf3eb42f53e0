"""Error taxonomy.

Every error is fatal for the current call chain and surfaces synchronously
to the immediate caller. "No match found" is never an error.
"""


class ProtoforgeError(Exception):
    """Base class for all protoforge errors."""

    pass


class InvalidArgumentError(ProtoforgeError):
    """Raised when a parameter has the wrong type or a malformed shape."""

    pass


class MissingArgumentError(ProtoforgeError):
    """Raised when a required parameter was omitted."""

    pass


class NotFoundError(ProtoforgeError):
    """Raised when a record referenced by name does not exist in the store."""

    pass


class AlreadyExistsError(ProtoforgeError):
    """Raised when creating a record whose name is already taken."""

    pass


class ManipulatorCommittedError(ProtoforgeError):
    """Raised when mutating a manipulator that has already been committed."""

    pass
