import os
import tomllib
from pathlib import Path


CONFIG_ENV = 'TREESNAP_CONFIG'

# Settings key constants
SETTING_LOGGING_PATH = 'logging.path'
SETTING_LOGGING_LEVEL = 'logging.level'
SETTING_CONCURRENCY = 'processing.concurrency'
SETTING_CHECK_NAMES = 'create.check_names'


class SettingsError(ValueError):
    """Raised when a setting holds a value of the wrong type or range."""


class Settings:
    """Read-only view of the TOML settings file.

    The file is optional; without it every get() returns its default. This class doesn't interpret values,
    consumers validate what they read.

    Example settings file:

        [logging]
        path = "/var/log/treesnap.log"
        level = "DEBUG"

        [processing]
        concurrency = 4

        [create]
        check_names = true
    """

    def __init__(self, settings_file: str | os.PathLike | None = None):
        """Load settings.

        Args:
            settings_file: TOML file to load. When None, the TREESNAP_CONFIG environment variable is consulted.
                           A path that doesn't exist yields empty settings.

        Raises:
            tomllib.TOMLDecodeError: If the file is not valid TOML
        """
        if settings_file is None:
            settings_file = os.environ.get(CONFIG_ENV)

        self._settings_file = Path(settings_file) if settings_file else None
        self._settings = {}

        if self._settings_file is not None and self._settings_file.exists():
            with open(self._settings_file, 'rb') as f:
                self._settings = tomllib.load(f)

    @property
    def settings_file(self) -> Path | None:
        return self._settings_file

    def get(self, key: str, default=None):
        """Get a setting value using dot notation for nested tables.

        Examples:
            >>> settings.get(SETTING_CONCURRENCY, 4)
            8
            >>> settings.get('nonexistent.key', 'fallback')
            'fallback'
        """
        value = self._settings

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value
