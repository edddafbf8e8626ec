"""Binding exceptions.

Fatal conditions abort the current extraction or injection call. Recoverable
conditions are logged by the services and never raised.
"""


class BindingError(Exception):
    """Base class for all binding failures."""


class DuplicateKeyError(BindingError):
    """Raised when one extraction pass produces the same key twice."""

    def __init__(self, key: str, group_id: str = None, row_index: int = None):
        self.key = key
        self.group_id = group_id
        self.row_index = row_index
        if group_id is None:
            message = f"Identifier is duplicated. name={key}"
        else:
            message = f"Column is duplicated in row. group={group_id} row={row_index} column={key}"
        super().__init__(message)


class ContainerNotFoundError(BindingError):
    """Raised when a composite identifier has no enclosing group container."""

    def __init__(self, group_id: str, identifier: str):
        self.group_id = group_id
        self.identifier = identifier
        super().__init__(
            f"Group container not found. id=#{group_id} (required by '{identifier}')"
        )


class InvalidScopeError(BindingError):
    """Raised when a scope root argument is not a tree node."""


class InvalidArgumentError(BindingError):
    """Raised for malformed value objects or blank identifiers."""
