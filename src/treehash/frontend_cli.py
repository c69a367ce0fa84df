import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import treehash.intern.helper as h
import treehash.intern.dbc as dbc
import treehash.intern.msg as msg
from treehash.component.algorithm import HashAlgorithm
from treehash.component.walker import RunConfiguration, DEFAULT_NAME_ENCODING
import treehash.component.run as run


DEFAULT_CONFIG_FILE: str = "./treehash.toml"
LOG_FORMAT: str = '%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s'


class _ArgumentParser(argparse.ArgumentParser):
    """
    An argument parser that raises a UsageError instead of exiting, so that all errors are reported the same way.
    """

    def error(self, message: str) -> None:
        dbc.raise_error({"msg": "USAGE", "details": message})


def create_parser() -> argparse.ArgumentParser:
    """
    Creates the parser for the command line
    "treehash <path> [algorithm] [-t resultFile] [-nowait] [-hashnames] [-exclude pattern]...".

    Returns:
        argparse.ArgumentParser: The parser.
    """
    parser = _ArgumentParser(
        prog='treehash',
        description='Recursively compute the hash of a directory content in lexicographical order, '
                    'or the hash of a single file.',
        allow_abbrev=False)
    parser.add_argument('path', help='the directory or file to hash')
    parser.add_argument('algorithm', nargs='?', default=None,
                        help=f'hash algorithm, not case sensitive: {", ".join(HashAlgorithm.ids())} (default SHA1)')
    parser.add_argument('-t', dest='result_file', metavar='ResultFileName',
                        help='text file where the result will be appended')
    parser.add_argument('-nowait', dest='nowait', action='store_true',
                        help='avoid displaying the waiting prompt before exiting')
    parser.add_argument('-hashnames', dest='hashnames', action='store_true',
                        help='include file and directory names in the hash computation')
    parser.add_argument('-exclude', dest='exclude', action='append', default=[], metavar='pattern',
                        help='exclude files and directories whose name matches the pattern, may be repeated')
    parser.add_argument('-c', '--config', dest='config', default=None,
                        help=f'toml configuration file path (default {DEFAULT_CONFIG_FILE} if it exists)')
    return parser


def load_config(config_file: Optional[str]) -> dict:
    """
    Loads the toml configuration. The default configuration file is optional, an explicitly given one is not.

    Args:
        config_file (str, optional): The configuration file given on the command line.

    Returns:
        dict: The configuration, empty if there is none.
    """
    if config_file is None:
        if not os.path.isfile(DEFAULT_CONFIG_FILE):
            return {}
        config_file = DEFAULT_CONFIG_FILE
    return h.load_toml_config(Path(config_file))


def init_logging(config: dict) -> None:
    """
    Initializes logging from the [logging] section of the configuration.

    Args:
        config (dict): The configuration.
    """
    logging_level = h.get_config_value(config, 'logging', 'level', 'WARNING')
    logging_file = h.get_config_value(config, 'logging', 'file')
    logging.basicConfig(format=LOG_FORMAT,
                        datefmt='%Y-%m-%d %H:%M:%S',
                        filename=logging_file,
                        encoding='utf-8',
                        level=logging_level)


def build_run_configuration(args: argparse.Namespace, config: dict) -> RunConfiguration:
    """
    Combines the command line and the configuration file. Command line values win, exclusion patterns are
    concatenated (configuration file first).

    Args:
        args (argparse.Namespace): The parsed command line.
        config (dict): The configuration.

    Returns:
        RunConfiguration: The configuration of the run.

    Raises:
        UsageError: If the algorithm is unknown.
    """
    algorithm_id = args.algorithm or h.get_config_value(config, 'hash', 'algorithm')
    include_names = args.hashnames or h.get_config_value(config, 'hash', 'hash_names', False)
    exclude = list(h.get_config_value(config, 'hash', 'exclude', [])) + list(args.exclude)
    name_encoding = h.get_config_value(config, 'hash', 'name_encoding', DEFAULT_NAME_ENCODING)
    return RunConfiguration(
        root=args.path,
        algorithm=HashAlgorithm.from_id(algorithm_id),
        include_names=include_names,
        exclude=tuple(exclude),
        name_encoding=name_encoding)


def wait_for_exit(dont_wait: bool) -> None:
    """
    Shows the "press enter" prompt and waits for the user, unless this is switched off.

    Args:
        dont_wait (bool): True to return immediately.
    """
    if dont_wait:
        return
    print(msg.get_message_text({"msg": "PRESS_ENTER", "category": "USER_ERROR"}), end="", flush=True)
    try:
        input()
    except EOFError:
        pass


def run_cli(argv: Optional[list[str]] = None) -> int:
    """
    Runs treehash for a command line and reports errors.

    Args:
        argv (list[str], optional): The arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        int: The exit status: 0 on success, 1 for usage errors, -1 if the path is too long,
        -2 if it doesn't exist, or the OS error number of a failed traversal or result file write.
    """
    if argv is None:
        argv = sys.argv[1:]
    parser = create_parser()
    dont_wait = "-nowait" in argv
    logger = logging.getLogger(__name__)

    msg.print({"msg": "BANNER", "algorithms": ", ".join(HashAlgorithm.ids())})
    try:
        args = parser.parse_intermixed_args(argv)
        config = load_config(args.config)
        init_logging(config)
        dont_wait = args.nowait or not h.get_config_value(config, 'cli', 'wait', True)
        run_config = build_run_configuration(args, config)
        if config:
            msg.log(logger.info, {"msg": "CONFIG_LOADED", "file": args.config or DEFAULT_CONFIG_FILE})

        result_file = run.open_result_file(args.result_file) if args.result_file else None
        try:
            # checked before the start message is printed
            run.check_input_path(run_config.root)
            msg.print({"msg": "HASH_STARTED", "algorithm": run_config.algorithm.algorithm_id,
                       "name": run.display_name(run_config.root)})
            result = run.run_hash(run_config, result_file)
        finally:
            if result_file is not None:
                result_file.close()
        print(result)
        exit_code = 0
    except dbc.UsageError as e:
        msg.print(e.error_description, prefix_with_error=True)
        print()
        parser.print_help()
        exit_code = e.exit_code
    except dbc.TreeHashException as e:
        msg.print(e.error_description, prefix_with_error=True)
        logger.error(msg.get_message_text_for_exception(e))
        exit_code = e.exit_code
    except OSError as e:
        # e.g. writing the result line failed after the file was opened
        error_text = msg.get_message_text_for_exception(e)
        print(f"*** ERROR *** {error_text}", flush=True)
        logger.error(error_text)
        exit_code = e.errno or 1

    wait_for_exit(dont_wait)
    return exit_code


def main() -> None:
    """
    Main entry point for the treehash command line tool.

    Returns:
        None
    """
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
