"""
Timeline Configuration Manager
Handles loading and saving layout and viewport preferences for the lock timeline.
"""

import json
import logging
import os

# Configure logger
logger = logging.getLogger(__name__)


class TimelineConfig:
    """
    Manages timeline layout preferences.
    Preferences are stored in the 'timeline' section of a JSON config file.
    """

    SECTION = 'timeline'

    DEFAULT_CONFIG = {
        'row_height': 30,  # Pixels per display row
        'zoom_factor': 1.3,  # Scale multiplier per wheel tick
        'coarse_scale_threshold': 0.1,  # Below this scale, use the coarse grid
        'coarse_grid_interval': 1000,
        'fine_grid_interval': 100,
        'major_line_every': 10,
        'max_grid_lines': 200,  # Interval widens past this many lines per frame
        'max_rendered_groups': 1000,
        'detail_min_width': 10,  # Minimum rect width in pixels for ticks and labels
        'tick_width': 2,
        'label_padding': 2,
    }

    def __init__(self, config_file=None, **overrides):
        """
        Initialize timeline configuration manager.

        Args:
            config_file: Path to configuration file (optional)
            **overrides: Values that take precedence over defaults and file
        """
        self.config_file = config_file
        self.config = dict(self.DEFAULT_CONFIG)

        if config_file and os.path.exists(config_file):
            self.load()

        for key, value in overrides.items():
            self.set(key, value, persist=False)

    def load(self):
        """Load timeline preferences from configuration file."""
        if not self.config_file or not os.path.exists(self.config_file):
            return

        try:
            if os.path.getsize(self.config_file) == 0:
                return

            with open(self.config_file, 'r') as f:
                data = json.load(f)

            section = data.get(self.SECTION) if isinstance(data, dict) else None
            if not isinstance(section, dict):
                return

            for key, value in section.items():
                if key not in self.DEFAULT_CONFIG:
                    logger.warning(f"Ignoring unknown timeline setting: {key}")
                    continue
                try:
                    self.set(key, value, persist=False)
                except ValueError as e:
                    logger.warning(f"Ignoring invalid timeline setting {key}={value!r}: {e}")

        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading timeline configuration from {self.config_file}: {e}")

    def save(self):
        """Save timeline preferences to configuration file."""
        if not self.config_file:
            return

        try:
            existing_data = {}
            if os.path.exists(self.config_file) and os.path.getsize(self.config_file) > 0:
                try:
                    with open(self.config_file, 'r') as f:
                        existing_data = json.load(f)
                except json.JSONDecodeError:
                    # File exists but is not valid JSON, start fresh
                    existing_data = {}
                if not isinstance(existing_data, dict):
                    existing_data = {}

            existing_data[self.SECTION] = self.config

            config_dir = os.path.dirname(self.config_file)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)

            with open(self.config_file, 'w') as f:
                json.dump(existing_data, f, indent=2)

        except OSError as e:
            logger.error(f"Error saving timeline configuration to {self.config_file}: {e}")

    def get(self, key):
        """
        Get a preference value.

        Args:
            key: Setting name (one of DEFAULT_CONFIG keys)

        Returns:
            The configured value
        """
        if key not in self.DEFAULT_CONFIG:
            raise KeyError(f"Unknown timeline setting: {key}")
        return self.config[key]

    def set(self, key, value, persist=True):
        """
        Set a preference value.

        Args:
            key: Setting name (one of DEFAULT_CONFIG keys)
            value: New positive numeric value
            persist: Save the configuration file afterwards
        """
        if key not in self.DEFAULT_CONFIG:
            raise KeyError(f"Unknown timeline setting: {key}")
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"{key} must be a positive number")
        if key == 'zoom_factor' and value <= 1:
            raise ValueError("zoom_factor must be greater than 1")

        default = self.DEFAULT_CONFIG[key]
        self.config[key] = type(default)(value) if isinstance(default, float) else value
        if persist:
            self.save()

    def reset_to_defaults(self):
        """Reset all preferences to defaults."""
        self.config = dict(self.DEFAULT_CONFIG)
        self.save()

    @property
    def row_height(self):
        return self.config['row_height']

    @property
    def zoom_factor(self):
        return self.config['zoom_factor']

    @property
    def coarse_scale_threshold(self):
        return self.config['coarse_scale_threshold']

    @property
    def coarse_grid_interval(self):
        return self.config['coarse_grid_interval']

    @property
    def fine_grid_interval(self):
        return self.config['fine_grid_interval']

    @property
    def major_line_every(self):
        return self.config['major_line_every']

    @property
    def max_grid_lines(self):
        return self.config['max_grid_lines']

    @property
    def max_rendered_groups(self):
        return self.config['max_rendered_groups']

    @property
    def detail_min_width(self):
        return self.config['detail_min_width']

    @property
    def tick_width(self):
        return self.config['tick_width']

    @property
    def label_padding(self):
        return self.config['label_padding']

    def __repr__(self):
        return f"TimelineConfig(file={self.config_file!r}, row_height={self.row_height})"
