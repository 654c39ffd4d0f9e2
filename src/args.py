"""Argument parsing functionality for depselect."""

import argparse

from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="depselect",
        description=(
            "depselect - prompt for and install optional packages declared "
            "in the project manifest"
        ),
        add_help=True,
    )

    parser.add_argument("-d", "--directory",
                        dest="DIRECTORY",
                        help="Project root containing the manifest (default: current directory)",
                        action="store", type=str,
                        default=".")
    parser.add_argument("-m", "--manifest",
                        dest="MANIFEST",
                        help=f"Manifest file name or path (default: {Constants.MANIFEST_FILE})",
                        action="store", type=str)
    parser.add_argument("-k", "--tool-key",
                        dest="TOOL_KEY",
                        help=f"Key under 'extra' holding the declarations (default: {Constants.TOOL_KEY})",
                        action="store", type=str)
    parser.add_argument("--installer",
                        dest="INSTALLER",
                        help=f"Package manager command (default: {Constants.INSTALLER_COMMAND})",
                        action="store", type=str)
    parser.add_argument("--wiring-command",
                        dest="WIRING_COMMAND",
                        help="Command run per installed package; {name}, {version} and {path} are substituted",
                        action="store", type=str)
    parser.add_argument("--vendor-dir",
                        dest="VENDOR_DIR",
                        help="Vendor directory (default: manifest config.vendor-dir or 'vendor')",
                        action="store", type=str)

    answer_group = parser.add_mutually_exclusive_group()
    answer_group.add_argument("-n", "--no-interaction",
                              dest="NO_INTERACTION",
                              help="Do not ask any question; every prompt takes its default (minimal install)",
                              action="store_true")
    answer_group.add_argument("--answers",
                              dest="ANSWERS",
                              help="Comma-separated scripted answers, e.g. 'n,y,n'",
                              action="store", type=str)

    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Ask the questions but do not install or modify the manifest",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    # Config file (general)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
