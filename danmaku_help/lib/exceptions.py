"""Exception hierarchy for the help registry.

All custom exceptions inherit from HelpError to enable
selective catching at different levels.

Hierarchy:
    HelpError (base)
    ├── NotFoundError - Unknown category or entry
    ├── ConfigError - Configuration issues (missing paths)
    ├── ValidationError - Malformed help payload
    └── PersistenceError - File or database read/write failures
"""


class HelpError(Exception):
    """
    Base exception for all help registry errors.

    Catching this will catch all custom exceptions from this module.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(HelpError):
    """
    Lookup miss.

    Raised when a requested category or entry does not exist.
    Lookups are deterministic, so retrying with the same input
    cannot succeed.

    CLI Exit Code: 4

    Attributes:
        category_id: Category that was requested
        entry_name: Entry that was requested (None for category lookups)
    """

    def __init__(self, category_id: str, entry_name: str | None = None):
        self.category_id = category_id
        self.entry_name = entry_name
        if entry_name is None:
            message = f"Help category '{category_id}' not found"
        else:
            message = f"Help entry '{entry_name}' not found in category '{category_id}'"
        super().__init__(message)


class ConfigError(HelpError):
    """
    Configuration error.

    Raised when required configuration is missing or invalid.
    Examples: seeding without a forum database path.

    CLI Exit Code: 2
    """

    pass


class ValidationError(HelpError):
    """
    Payload validation error.

    Raised when help content fails validation rules.
    Examples: empty content, missing name, duplicate category id.

    CLI Exit Code: 3
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class PersistenceError(HelpError):
    """
    Storage read/write error.

    Raised when loading a payload, exporting it, or talking to the
    forum database fails.

    CLI Exit Code: 5

    Attributes:
        path: Path that caused the error
        operation: Operation that failed (read, write, query)
    """

    def __init__(self, message: str, path: str | None = None, operation: str | None = None):
        self.path = path
        self.operation = operation
        super().__init__(message)
