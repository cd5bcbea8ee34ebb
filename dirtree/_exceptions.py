class DTInvalidNodeError(ValueError):
    """Raised when a node is of the wrong kind or has been detached from its tree."""


class DTStructureError(ValueError):
    """Raised when an operation would break the shape rules of a tree."""


class DTNodeLimitExceededError(DTStructureError):
    """Raised when the node count limit is exceeded. Subclass of DTStructureError."""
    def __init__(self, current: int, requested: int, limit: int) -> None:
        self.current = current
        self.requested = requested
        self.limit = limit
        super().__init__(
            f"Node limit exceeded: current {current} nodes, "
            f"requested {requested} more, limit is {limit}."
        )


class DTNavigationError(ValueError):
    """Raised when a path ascends above the root."""


class DTInvalidNameError(ValueError):
    """Raised for blank names or names containing separators or control characters."""
    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name {name!r}: {reason}.")


class DTDuplicateNameError(FileExistsError):
    """Raised when a sibling already bears the name. Subclass of FileExistsError."""
    def __init__(self, name: str, directory: str) -> None:
        self.name = name
        self.directory = directory
        super().__init__(f"An item named '{name}' already exists in '{directory}'.")


class DTNotFoundError(FileNotFoundError):
    """Raised when a path segment or search key does not resolve."""


class DTNotADirectoryError(NotADirectoryError):
    """Raised when a directory is required but a file was given."""
