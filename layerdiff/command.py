# Copyright Red Hat
#
# layerdiff/command.py - Module layer differ command interface
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
"""The ``layerdiff.command`` module provides both the layerdiff command line
interface infrastructure, and a simple procedural interface to the
``layerdiff`` library modules.

The procedural interface is used by the ``layerdiff`` command line tool,
and may be used by application programs, or interactively in the
Python shell.
"""
from argparse import ArgumentParser
from os.path import basename
import logging
import sys

from layerdiff import (
    LayerdiffError,
    LAYERDIFF_DEBUG_SCAN,
    LAYERDIFF_DEBUG_DIFF,
    LAYERDIFF_DEBUG_COMMAND,
    LAYERDIFF_DEBUG_ALL,
    LAYERDIFF_SUBSYSTEM_COMMAND,
    DEFAULT_LAYER_PATH,
    SubsystemFilter,
    set_debug_mask,
    __version__,
)
from .moddiff import DiffOptions, DiffReport, TreeWalker, diff_installations

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_command(msg, *args, **kwargs):
    """A wrapper for command subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": LAYERDIFF_SUBSYSTEM_COMMAND}, **kwargs)


_LOG_FORMAT = "%(levelname)s - %(message)s"

#: Log level selected by the number of ``-v`` options given
_VERBOSE_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

#: ``--debug`` option names
_DEBUG_OPTIONS = {
    "scan": LAYERDIFF_DEBUG_SCAN,
    "diff": LAYERDIFF_DEBUG_DIFF,
    "command": LAYERDIFF_DEBUG_COMMAND,
    "all": LAYERDIFF_DEBUG_ALL,
}


def diff_roots(from_root, to_root, options=None):
    """
    Compare the module layers of two installation roots.

    Both installations are scanned completely before they are compared.

    :param from_root: The original installation root directory.
    :param to_root: The updated installation root directory.
    :param options: Optional ``DiffOptions`` controlling the scan.
    :returns: A ``DiffReport`` describing the differences.
    """
    options = options or DiffOptions()
    walker = TreeWalker(options)
    installation1 = walker.walk_installation(from_root)
    installation2 = walker.walk_installation(to_root)
    return diff_installations(installation1, installation2)


def _diff_cmd(cmd_args):
    """
    Diff installations command handler.

    Compare the module layers of two installations and print the report.

    :param cmd_args: Command line arguments for the command
    :returns: integer status code returned from ``main()``
    """
    options = DiffOptions.from_cmd_args(cmd_args)
    _log_debug_command("Using options:\n%s", options)

    report: DiffReport = diff_roots(cmd_args.diff_from, cmd_args.diff_to, options)
    report.render(sys.stdout)
    return 0


def setup_logging(cmd_args):
    """
    Set up layerdiff logging: a single stderr handler on the ``layerdiff``
    logger, at a level chosen by ``--verbose``, filtered by subsystem.
    """
    verbose = min(cmd_args.verbose or 0, len(_VERBOSE_LEVELS) - 1)
    level = _VERBOSE_LEVELS[verbose]

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler.addFilter(SubsystemFilter("layerdiff"))

    layerdiff_log = logging.getLogger("layerdiff")
    layerdiff_log.setLevel(level)
    layerdiff_log.handlers.clear()
    layerdiff_log.addHandler(handler)


def shutdown_logging():
    """
    Shut down layerdiff logging.
    """
    logging.shutdown()


def set_debug(debug_arg):
    """
    Set debugging mask from a comma separated ``--debug`` argument.
    """
    if not debug_arg:
        return

    mask = 0
    for name in debug_arg.split(","):
        if name not in _DEBUG_OPTIONS:
            raise ValueError(f"Unknown debug option: {name}")
        mask |= _DEBUG_OPTIONS[name]
    set_debug_mask(mask)


def _add_diff_args(parser):
    """
    Add diff command arguments.
    """
    parser.add_argument(
        "diff_from",
        metavar="FROM",
        help="The root directory of the original installation",
    )
    parser.add_argument(
        "diff_to",
        metavar="TO",
        help="The root directory of the updated installation",
    )
    parser.add_argument(
        "--layer",
        dest="layer_path",
        metavar="PATH",
        default=DEFAULT_LAYER_PATH,
        help=f"Module layer path below each root (default: {DEFAULT_LAYER_PATH})",
    )
    parser.add_argument(
        "--no-follow-symlinks",
        dest="follow_symlinks",
        action="store_false",
        help="Do not follow symbolic links when walking module layers",
    )
    parser.add_argument(
        "-f",
        "--file-types",
        dest="use_magic_file_type",
        action="store_true",
        help="Use libmagic to skip files that are not zip archives (slower)",
    )


def main(args):
    """
    Main entry point for layerdiff.
    """
    parser = ArgumentParser(
        description="Module layer differ", prog=basename(args[0])
    )

    # Global arguments
    parser.add_argument(
        "-d",
        "--debug",
        metavar="DEBUGOPTS",
        type=str,
        help="A list of debug options to enable",
    )
    parser.add_argument("-v", "--verbose", help="Enable verbose output", action="count")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        help="Report the version number of layerdiff",
        version=__version__,
    )
    _add_diff_args(parser)

    cmd_args = parser.parse_args(args[1:])

    status = 1

    try:
        set_debug(cmd_args.debug)
    except ValueError as err:
        print(err, file=sys.stderr)
        parser.print_help(sys.stderr)
        return status

    setup_logging(cmd_args)

    _log_debug_command("Parsed %s", " ".join(args[1:]))

    if cmd_args.debug:
        status = _diff_cmd(cmd_args)
    else:
        try:
            status = _diff_cmd(cmd_args)
        except KeyboardInterrupt:  # pragma: no cover
            _log_info("Exiting on user cancel")
        except LayerdiffError as err:
            _log_error("Command failed: %s", err)

    shutdown_logging()
    return status


# vim: set et ts=4 sw=4 :
