import builtins
from typing import Dict, Any, Callable

import treehash.intern.dbc as dbc


messages_en: Dict[str, str] = {
    "CONFIG_NOT_LOADED": "configuration file \"{file}\" could not be loaded: {reason}",
    "DIRECTORY_LIST_FAILED": "listing the content of directory \"{path}\" failed with error {errno}: {reason}",
    "FILE_OPEN_FAILED": "failed to open file \"{path}\" for reading (error {errno}: {reason})",
    "INVALID_CONFIG": "invalid configuration file \"{file}\": {error}",
    "INVALID_STATE": "hash state of {algorithm} used after it was finalized",
    "IO_FAILED": "input/output error on \"{path}\" (error {errno}: {reason})",
    "PATH_NOT_FOUND": "the given input file \"{path}\" doesn't exist",
    "PATH_TOO_LONG": "input directory/file path is too long. Maximum length is {max_length} characters",
    "RESULT_FILE_FAILED": "failed to open the result file \"{path}\" for writing",
    "SYSTEM_ERROR": "internal error. Details: \"{details}\".",
    "UNKNOWN_ARGUMENT": "argument \"{argument}\" not recognized",
    "USAGE": "{details}",

    "BANNER": "\ntreehash\n\nRecursively compute hash of a given directory content in lexicographical order.\n"
              "It can also compute the hash of a single file.\n\nSupported Algorithms : {algorithms}\n",
    "CONFIG_LOADED": "configuration loaded from \"{file}\"",
    "DIRECTORY_EXCLUDED": "directory \"{path}\" excluded",
    "FILE_EXCLUDED": "file \"{path}\" excluded",
    "HASH_DONE": "hash of \"{path}\" computed: {result}",
    "HASH_STARTED": "Using {algorithm} to compute hash of \"{name}\" ...",
    "PRESS_ENTER": "\n\nPress ENTER to exit the program ...",
    "RESULT_APPENDED": "result appended to \"{path}\"",
}


def print(msgkey_and_params: Dict[str, Any], prefix_with_error: bool = False) -> None:
    """
    Print a message text as defined by a message key. The message dictionary contains the message key and its parameters.

    Args:
        msgkey_and_params (dict): Message key and its parameters.
        prefix_with_error (bool, optional): If True, prefix the message with "*** ERROR ***". Default is False.
    """
    msgkey_and_params.setdefault("category", "USER_ERROR")
    if prefix_with_error:
        builtins.print(f"*** ERROR *** {get_message_text(msgkey_and_params)}", flush=True)
    else:
        builtins.print(get_message_text(msgkey_and_params), flush=True)


def log(log_function: Callable[[str], None], msgkey_and_params: Dict[str, Any]) -> None:
    """
    Log a message text as defined by a message key, e.g. msg.log(logger.info, {"msg": "RESULT_APPENDED", "path": p}).

    Args:
        log_function (callable): The bound logger method to use.
        msgkey_and_params (dict): Message key and its parameters.
    """
    msgkey_and_params.setdefault("category", "USER_ERROR")
    log_function(get_message_text(msgkey_and_params))


def get_message_text(msgkey_and_params: Dict[str, Any]) -> str:
    """
    Create a message text from a dictionary. The dictionary contains the message key and its parameters.

    Args:
        msgkey_and_params (dict): Message key and its parameters.

    Returns:
        str: The formatted message.
    """
    if not isinstance(msgkey_and_params, dict):
        return error_in_message_handling("message is no dict")
    if msgkey_and_params.get("category", "SYSTEM_ERROR") == "USER_ERROR":
        msg_context = ""
    else:
        msg_context = " !!! This is a system error. Please report it !!!"
    message_key = msgkey_and_params.get("msg", "--NO_MESSAGE_KEY--")
    message = messages_en.get(message_key, "--NO_MESSAGE--")
    if message == "--NO_MESSAGE--":
        return get_message_text({"msg": "SYSTEM_ERROR", "details": f"message key \"{message_key}\" not found"})
    try:
        return message.format(**msgkey_and_params) + msg_context
    except KeyError as e:
        return get_message_text({"msg": "SYSTEM_ERROR", "details": f"parameter {e} missing for \"{message_key}\""})


def get_message_text_for_exception(exception: Exception) -> str:
    """
    Retrieve the error message for a given exception.

    Args:
        exception (Exception): The exception object.

    Returns:
        str: The formatted error message.
    """
    if isinstance(exception, dbc.TreeHashException):
        return get_message_text(exception.error_description)
    if isinstance(exception, OSError):
        return get_message_text({
            "msg": "IO_FAILED",
            "path": exception.filename,
            "errno": exception.errno,
            "reason": exception.strerror,
            "category": "USER_ERROR"})
    # add more lines before to process more special exceptions
    return error_in_message_handling(f"unexpected exception \"{type(exception).__name__}\"")


def error_in_message_handling(details: str) -> str:
    """
    Handle errors that occur during message processing. Be careful, when changing this: it is used for error processing,
    thus there is a potential for an endless loop :-)

    Args:
        details (str): Indication of the internal error.

    Returns:
        str: A message indicating an unprocessed exception.
    """
    return get_message_text({"msg": "SYSTEM_ERROR", "details": details})
