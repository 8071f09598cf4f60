"""Configuration management for the signal monitor."""

import os
import configparser
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from signal_monitor.config.settings import SignalMonitorSettings
from signal_monitor.core.exceptions import ConfigurationError, SignalMonitorError


class ConfigurationManager:
    """Manages application configuration from multiple sources.

    Precedence, lowest first: built-in defaults, INI file, environment
    variables (SIGNAL_MONITOR_<SECTION>__<KEY>).
    """

    ENV_PREFIX = "SIGNAL_MONITOR_"

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, looks for config/config.ini
        """
        self._config = {}
        self._config_path = Path(config_path) if config_path else Path("config/config.ini")
        self._load_defaults()
        self._load_from_file()
        self._load_from_environment()

    def _load_defaults(self) -> None:
        """Load default configuration values."""
        self._config = {
            # Channel Settings
            'channel': {
                'name': 'channel',
                'domain_min': 0,
                'domain_max': 255,
                'destination_min': 0.0,
                'destination_max': 1.0,
                'nominal_min': 0.2,
                'nominal_max': 0.7,
                'error_threshold': None,
                'history_depth': 2,
            },

            # Logging Settings
            'logging': {
                'level': 'INFO',
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                'file_enabled': False,
                'console_enabled': True,
                'log_directory': 'logs',
                'max_file_size_mb': 10,
                'backup_count': 5,
            },

            # Core Settings
            'core': {
                'environment': 'development',
                'debug': False,
            }
        }

    def _load_from_file(self) -> None:
        """Load configuration from INI file."""
        if not self._config_path.exists():
            return

        try:
            # Interpolation off so '%(asctime)s' style log formats survive
            parser = configparser.ConfigParser(interpolation=None)
            parser.read(self._config_path)

            for section_name in parser.sections():
                section = 'core' if section_name.upper() == 'GENERAL' else section_name.lower()
                if section not in self._config:
                    self._config[section] = {}

                for key, value in parser[section_name].items():
                    self._config[section][key] = self._convert_value(value)

        except configparser.Error as e:
            raise ConfigurationError(f"Error loading config file: {e}", cause=e)

    def _load_from_environment(self) -> None:
        """Load configuration from environment variables."""
        prefix = self.ENV_PREFIX

        for key, value in os.environ.items():
            if key.startswith(prefix):
                # Parse nested keys: SIGNAL_MONITOR_CHANNEL__NOMINAL_MIN
                config_key = key[len(prefix):].lower()
                parts = config_key.split('__')

                if len(parts) == 2:
                    section, setting = parts
                    if section not in self._config:
                        self._config[section] = {}
                    self._config[section][setting] = self._convert_value(value)
                elif len(parts) == 1:
                    # Direct setting
                    self._config['core'][parts[0]] = self._convert_value(value)

    def _convert_value(self, value: str) -> Any:
        """Convert string value to appropriate type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        if value.lower() in ('null', 'none', ''):
            return None

        # Try numeric conversion
        try:
            if '.' in value or 'e' in value.lower():
                return float(value)
            else:
                return int(value)
        except ValueError:
            pass

        return value

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a configuration setting.

        Args:
            key: Setting key in format 'section.setting' or 'setting'
            default: Default value if setting not found

        Returns:
            Setting value or default
        """
        parts = key.split('.')

        if len(parts) == 1:
            return self._config.get('core', {}).get(parts[0], default)
        elif len(parts) == 2:
            section, setting = parts
            return self._config.get(section, {}).get(setting, default)
        else:
            raise ConfigurationError(f"Invalid setting key format: {key}")

    def set_setting(self, key: str, value: Any) -> None:
        """Set a configuration setting.

        Args:
            key: Setting key in format 'section.setting' or 'setting'
            value: Value to set
        """
        parts = key.split('.')

        if len(parts) == 1:
            self._config.setdefault('core', {})[parts[0]] = value
        elif len(parts) == 2:
            section, setting = parts
            self._config.setdefault(section, {})[setting] = value
        else:
            raise ConfigurationError(f"Invalid setting key format: {key}")

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get a copy of all settings for a section."""
        return self._config.get(section, {}).copy()

    def save_configuration(self, config_path: Optional[Union[str, Path]] = None) -> None:
        """Save current configuration to file.

        Args:
            config_path: Path to save config. If None, uses default path.
        """
        save_path = Path(config_path) if config_path else self._config_path

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            parser = configparser.ConfigParser(interpolation=None)

            for section_name, section_data in self._config.items():
                if section_name == 'core':
                    section_name = 'GENERAL'
                else:
                    section_name = section_name.upper()

                parser.add_section(section_name)
                for key, value in section_data.items():
                    parser.set(section_name, key, '' if value is None else str(value))

            with open(save_path, 'w') as f:
                parser.write(f)

        except (OSError, configparser.Error) as e:
            raise ConfigurationError(f"Error saving config file: {e}", cause=e)

    def to_settings(self) -> SignalMonitorSettings:
        """Build validated settings from the merged configuration.

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        channel = self.get_section('channel')
        core = self.get_section('core')
        payload = {
            'environment': core.get('environment', 'development'),
            'debug': core.get('debug', False),
            'channel': {
                'name': channel.get('name'),
                'domain': {'min': channel.get('domain_min'), 'max': channel.get('domain_max')},
                'destination': {
                    'min': channel.get('destination_min'),
                    'max': channel.get('destination_max'),
                },
                'nominal': {'min': channel.get('nominal_min'), 'max': channel.get('nominal_max')},
                'error_threshold': channel.get('error_threshold'),
                'history_depth': channel.get('history_depth'),
            },
            'logging': self.get_section('logging'),
        }

        try:
            return SignalMonitorSettings.model_validate(payload)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e.error_count()} error(s)",
                details={'errors': e.errors(include_url=False)},
                cause=e
            )

    def validate_configuration(self) -> bool:
        """Validate current configuration.

        Returns:
            True if configuration is valid

        Raises:
            ConfigurationError: If configuration is invalid
        """
        settings = self.to_settings()

        try:
            monitor = settings.channel.build_monitor()
        except SignalMonitorError as e:
            raise ConfigurationError(f"Configuration validation failed: {e.message}", cause=e)

        # A zero-width domain builds fine but fails on every reading
        if monitor.domain.size() == 0:
            raise ConfigurationError(
                "Configuration validation failed: channel domain has zero size",
                details={'domain': {'min': monitor.domain.min, 'max': monitor.domain.max}}
            )

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Get configuration as dictionary."""
        return self._config.copy()

    def from_dict(self, config_dict: Dict[str, Any]) -> None:
        """Merge configuration sections from a dictionary."""
        for section, values in config_dict.items():
            self._config.setdefault(section, {}).update(values)
