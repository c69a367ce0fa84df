class TreeHashException(Exception):
    """
    Custom exception class for handling user and system errors.

    Attributes:
        error_description (dict): The description of the error. Its "msg" key refers to the message catalog.
        exit_code (int): The process exit status used when the exception terminates a run.
    """

    exit_code: int = 1

    def __init__(self, error_description: dict):
        super().__init__(error_description)
        self.error_description: dict = error_description

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.error_description}"


class UsageError(TreeHashException):
    """Malformed command line: missing switch argument, unknown algorithm token."""


class PathTooLongError(TreeHashException):
    """The input path exceeds the platform path-length limit."""
    exit_code = -1


class PathNotFoundError(TreeHashException):
    """The input path does not exist."""
    exit_code = -2


class TraversalError(TreeHashException):
    """
    Base for traversal errors. The exit status is the errno of the underlying OS error, if there is one.
    """

    @property
    def exit_code(self) -> int:
        return self.error_description.get("errno") or 1


class DirectoryListError(TraversalError):
    """Listing the content of a directory failed."""


class FileOpenError(TraversalError):
    """A regular file could not be opened or read."""


class OutputFileError(TreeHashException):
    """The result file could not be opened for appending."""


class ConfigError(TreeHashException):
    """The configuration file could not be loaded or is invalid."""
    exit_code = 12


# maps message keys to the exception class raised for them, everything else is a TreeHashException
_exception_class_by_msg: dict = {
    "UNKNOWN_ARGUMENT": UsageError,
    "USAGE": UsageError,
    "PATH_TOO_LONG": PathTooLongError,
    "PATH_NOT_FOUND": PathNotFoundError,
    "DIRECTORY_LIST_FAILED": DirectoryListError,
    "FILE_OPEN_FAILED": FileOpenError,
    "RESULT_FILE_FAILED": OutputFileError,
    "INVALID_CONFIG": ConfigError,
    "CONFIG_NOT_LOADED": ConfigError,
}


def raise_error(error_description: dict, user_error: bool = True) -> None:
    """
    Raise a user-related or system error. The class of the exception is selected by the message key.

    Args:
        error_description (dict): A dictionary containing details about the error.
        user_error (bool, optional): True for user errors, False for system errors. Default is True.

    Raises:
        TreeHashException: Always raises a TreeHashException (or a subclass) with the provided description.
    """
    error_description["category"] = "USER_ERROR" if user_error else "SYSTEM_ERROR"
    exception_class = _exception_class_by_msg.get(error_description.get("msg"), TreeHashException)
    raise exception_class(error_description)


def assert_true(condition: bool, error_description: dict, user_error: bool = True) -> None:
    """
    Assert a condition. Raise a user or system error if the condition is False.

    Args:
        condition (bool): The condition to assert.
        error_description (dict): A dictionary containing details about the error.
        user_error (bool, optional): True for user errors, False for system (programming) errors. Default is True.

    Raises:
        TreeHashException: If the condition is False.
    """
    if not condition:
        raise_error(error_description, user_error)
