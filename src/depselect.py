"""depselect - prompt for and install optional packages.

Meant to run from the package manager's post-install / post-update hooks.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from cli_config import build_run_config
from common.logging_utils import add_file_handler, configure_logging
from constants import ExitCodes
from installer import CommandConfigWirer, CommandInstaller, InstalledPackageLocator, NullConfigWirer
from manifest import ManifestFile
from runner import OptionalPackagesInstaller
from selection import (
    ConfigError,
    ConsolePort,
    ExhaustedInputError,
    InstallError,
    ManifestError,
    NonInteractivePort,
    ScriptedPort,
)

logger = logging.getLogger(__name__)


def build_port(args, stdin=None):
    """Pick the prompt channel: scripted answers, non-interactive, or console."""
    stdin = stdin or sys.stdin
    if getattr(args, "ANSWERS", None) is not None:
        answers = [a.strip() or None for a in args.ANSWERS.split(",")]
        return ScriptedPort(answers, stdout=sys.stdout)
    if getattr(args, "NO_INTERACTION", False) or not stdin.isatty():
        return NonInteractivePort()
    return ConsolePort(stdin=stdin)


def build_installer(config, port):
    """Assemble the run orchestrator from a resolved RunConfig."""
    manifest_file = ManifestFile(config.manifest_path)
    manifest = manifest_file.read()
    if config.wiring_command:
        wirer = CommandConfigWirer(config.wiring_command, cwd=manifest_file.directory)
    else:
        wirer = NullConfigWirer()
    return OptionalPackagesInstaller(
        manifest_file=manifest_file,
        port=port,
        installer=CommandInstaller(config.installer_command, manifest_file),
        wirer=wirer,
        locator=InstalledPackageLocator(config.resolve_vendor_dir(manifest)),
        tool_key=config.tool_key,
        dry_run=config.dry_run,
    )


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)

    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)
        logger.info("Logging to file: %s", args.LOG_FILE)

    try:
        config = build_run_config(args)
        logger.debug("Run configuration: %s", config)
        installer = build_installer(config, build_port(args))
        selection = installer.run()
    except (ManifestError, ConfigError) as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except InstallError as e:
        logger.debug("%s", e)
        logger.error("Error installing optional packages. Run with --loglevel DEBUG to debug")
        sys.exit(ExitCodes.INSTALL_ERROR.value)
    except ExhaustedInputError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.INPUT_ERROR.value)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(ExitCodes.INPUT_ERROR.value)

    logger.debug("Finished with state %s", selection.state.value)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
