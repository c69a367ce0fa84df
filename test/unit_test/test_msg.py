import logging

import treehash.intern.dbc as dbc
import treehash.intern.msg as msg


def test_message_text():
    text = msg.get_message_text({"msg": "PATH_NOT_FOUND", "path": "/x", "category": "USER_ERROR"})
    assert text == "the given input file \"/x\" doesn't exist"


def test_system_errors_are_marked():
    text = msg.get_message_text({"msg": "INVALID_STATE", "algorithm": "SHA1", "category": "SYSTEM_ERROR"})
    assert text.endswith("!!! This is a system error. Please report it !!!")


def test_unknown_key_and_missing_parameter():
    assert "message key \"NO_SUCH_KEY\" not found" in msg.get_message_text({"msg": "NO_SUCH_KEY"})
    assert "parameter 'path' missing" in msg.get_message_text({"msg": "PATH_NOT_FOUND"})


def test_message_for_exceptions():
    try:
        dbc.raise_error({"msg": "FILE_OPEN_FAILED", "path": "/f", "errno": 13, "reason": "Permission denied"})
    except dbc.TreeHashException as e:
        assert isinstance(e, dbc.FileOpenError)
        text = msg.get_message_text_for_exception(e)
    assert text == "failed to open file \"/f\" for reading (error 13: Permission denied)"

    text = msg.get_message_text_for_exception(OSError(28, "No space left on device", "/g"))
    assert text == "input/output error on \"/g\" (error 28: No space left on device)"
    text = msg.get_message_text_for_exception(KeyError("k"))
    assert "unexpected exception \"KeyError\"" in text
    assert text.endswith("!!! This is a system error. Please report it !!!")


def test_raise_error_selects_the_exception_class():
    for key, exception_class in [("USAGE", dbc.UsageError),
                                 ("PATH_TOO_LONG", dbc.PathTooLongError),
                                 ("PATH_NOT_FOUND", dbc.PathNotFoundError),
                                 ("DIRECTORY_LIST_FAILED", dbc.DirectoryListError),
                                 ("RESULT_FILE_FAILED", dbc.OutputFileError),
                                 ("SYSTEM_ERROR", dbc.TreeHashException)]:
        try:
            dbc.raise_error({"msg": key})
        except dbc.TreeHashException as e:
            assert type(e) is exception_class


def test_os_error_exit_code_falls_back_to_one():
    assert dbc.DirectoryListError({"msg": "DIRECTORY_LIST_FAILED", "errno": None}).exit_code == 1
    assert dbc.DirectoryListError({"msg": "DIRECTORY_LIST_FAILED", "errno": 2}).exit_code == 2


def test_print_and_log(capsys, caplog):
    msg.print({"msg": "PATH_NOT_FOUND", "path": "/x"}, prefix_with_error=True)
    assert capsys.readouterr().out == "*** ERROR *** the given input file \"/x\" doesn't exist\n"
    logger = logging.getLogger("treehash.test")
    with caplog.at_level(logging.INFO):
        msg.log(logger.info, {"msg": "RESULT_APPENDED", "path": "r.txt"})
    assert "result appended to \"r.txt\"" in caplog.text
