from typing import Final


DEFAULT_BROWSER_VERSION: Final[str] = "0"
DEFAULT_DESCRIPTION: Final[str] = "The GPU is unavailable for an unexplained reason."

LOG_LEVEL_ENV: Final[str] = "GPU_BLACKLIST_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

YAML_SUFFIXES: Final[tuple[str, ...]] = (".yaml", ".yml")
