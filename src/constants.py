"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    INSTALL_ERROR = 2
    INPUT_ERROR = 3


class RequirementSections(Enum):
    """Manifest sections that optional packages are written into.

    Args:
        Enum (string): Manifest section keys.
    """

    REQUIRE = "require"
    REQUIRE_DEV = "require-dev"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    TOOL_KEY = "depselect"
    MANIFEST_FILE = "composer.json"
    LOCK_FILE = "composer.lock"
    VENDOR_DIR = "vendor"
    INSTALLED_JSON = "composer/installed.json"
    INSTALLER_COMMAND = "composer"
    ROOT_PACKAGE = "__root__"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    FILE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    JSON_INDENT = 4

    ENV_LOG_LEVEL = "DEPSELECT_LOG_LEVEL"
    ENV_INSTALLER = "DEPSELECT_INSTALLER"
    ENV_WIRING_COMMAND = "DEPSELECT_WIRING_COMMAND"
    ENV_MANIFEST = "COMPOSER"

    # Exit status reported when the installer executable cannot be started
    COMMAND_NOT_FOUND = 127
    # Exit status reported when the temporary manifest/lock pair cannot be written
    PREPARE_FAILED = 1

    MINIMAL_QUESTION = "Do you want a minimal install (no optional packages)?"
    PROMPT_TEMPLATE = "Install {name} ({constraint})?"
    INVALID_ANSWER = "Invalid answer"
    NONE_SELECTED = "    No optional packages selected to install"
    WILL_INSTALL = "    Will install {name} ({constraint})"
    PACKAGE_CONFIG_PROMPTS = {
        RequirementSections.REQUIRE.value: (
            "    When prompted to install as a module, select "
            "application.config.php or modules.config.php"
        ),
        RequirementSections.REQUIRE_DEV.value: (
            "    When prompted to install as a module, select "
            "development.config.php.dist"
        ),
    }
