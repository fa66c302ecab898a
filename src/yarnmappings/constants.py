"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NO_RESULTS = 3
    NO_SUCH_VERSION = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    META_URL = "https://meta.fabricmc.net/v1"
    MAVEN_URL = "https://maven.fabricmc.net/"
    DATA_DIR = "data/yarn"
    VERSION_FILE = ".dataversion"
    USER_AGENT = "yarnmappings/0.1"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    DOWNLOAD_CHUNK_SIZE = 64 * 1024

    # Cached mapping lists expire this long after insertion
    MAPPING_CACHE_TTL_SEC = 4 * 60 * 60
    # Minimum delay between two remote version checks of the same version
    REFRESH_INTERVAL_SEC = 4 * 60 * 60

    # Artifact repository answers meaning "this build has no mergedv2 jar"
    FORMAT_UNAVAILABLE_CODES = frozenset({400, 403, 404, 500})

    ENV_CONFIG = "YARNMAPPINGS_CONFIG"
    ENV_LOG_LEVEL = "YARNMAPPINGS_LOG_LEVEL"
    ENV_DATA_DIR = "YARNMAPPINGS_DATA_DIR"
    ENV_META_URL = "YARNMAPPINGS_META_URL"
    ENV_MAVEN_URL = "YARNMAPPINGS_MAVEN_URL"
    DEFAULT_CONFIG_PATHS = (
        "yarnmappings.yml",
        "yarnmappings.yaml",
        "~/.config/yarnmappings/config.yml",
    )
