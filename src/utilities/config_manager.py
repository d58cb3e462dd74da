import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "spline": {
        "scheme": "catmull_rom",  # catmull_rom or bezier
        "resolution": 30,  # samples per curve, 20-50 recommended
        "closed": False,
    },
    "logging": {
        "level": "INFO",
        "mode": "console",  # none, file, console or all
    },
}


class ConfigManager:
    """Handles loading, saving, and accessing configuration values."""

    def __init__(self, config_file_path="config.yaml"):
        """Initialize the configuration manager.

        Args:
            config_file_path: Path to the configuration file (default: config.yaml)
        """
        self.config_file_path = config_file_path
        self.config = self._load_config()

    def _load_config(self):
        """Load configuration from YAML file.

        Returns:
            dict: Configuration values or default configuration if the file
            doesn't exist or can't be parsed
        """
        default_config = copy.deepcopy(DEFAULT_CONFIG)

        if not os.path.exists(self.config_file_path):
            logger.info(
                f"Configuration file not found. Creating default at {self.config_file_path}"
            )
            self.config = default_config
            self._save_config()
            return default_config

        try:
            with open(self.config_file_path, "r") as file:
                config = yaml.safe_load(file)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading configuration: {e}")
            return default_config

        logger.info(f"Configuration loaded from {self.config_file_path}")

        if not isinstance(config, dict):
            return default_config

        # Make sure all sections and keys exist (in case config file is incomplete)
        for section, values in default_config.items():
            if not isinstance(config.get(section), dict):
                config[section] = values
            else:
                for key, value in values.items():
                    config[section].setdefault(key, value)

        return config

    def _save_config(self):
        """Save current configuration to YAML file."""
        try:
            with open(self.config_file_path, "w") as file:
                yaml.safe_dump(self.config, file, default_flow_style=False)
            logger.info(f"Configuration saved to {self.config_file_path}")
            return True
        except OSError as e:
            logger.error(f"Error saving configuration: {e}")
            return False

    def get_value(self, section, key, default=None):
        """Get a configuration value.

        Args:
            section: Configuration section (e.g., 'spline', 'logging')
            key: Configuration key within the section
            default: Default value if the key doesn't exist

        Returns:
            The configuration value or default if not found
        """
        try:
            return self.config[section][key]
        except KeyError:
            return default

    def set_value(self, section, key, value):
        """Set a configuration value and save the configuration.

        Returns:
            bool: True if successful, False otherwise
        """
        if section not in self.config:
            self.config[section] = {}

        self.config[section][key] = value

        return self._save_config()

    def get_all_config(self):
        return self.config

    def get_section(self, section, default=None):
        try:
            return self.config[section]
        except KeyError:
            return default
