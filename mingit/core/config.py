"""Configuration management for MinGit.

Repository-local and global settings are INI files read with
configparser. The only settings the core consumes are the author
identity (user.name and user.email) used when recording commits.
"""

import os
import configparser
from pathlib import Path
from typing import Optional, Dict, Tuple


DEFAULT_NAME = 'MinGit User'
DEFAULT_EMAIL = 'user@example.com'


class Config:
    """
    Manages MinGit configuration files.

    - Global config: ~/.mingitconfig
    - Repository config: .mingit/config

    Environment variables take precedence over repository config,
    which takes precedence over global config.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.mingitconfig'

    def __init__(self, repo_config_path: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
            global_config_path: Override for the global config location
        """
        self.repo_config_path = repo_config_path
        self.global_config_path = global_config_path or self.GLOBAL_CONFIG_PATH
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = configparser.ConfigParser()
            if self.global_config_path.exists():
                self._global_config.read(self.global_config_path)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = configparser.ConfigParser()
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (MINGIT_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value
        """
        env_value = os.environ.get(f"MINGIT_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        return fallback

    def _target(self, global_config: bool) -> Tuple[configparser.ConfigParser, Path]:
        if global_config:
            return self.global_config, self.global_config_path
        if not self.repo_config_path:
            raise ValueError("No repository config path available")
        return self.repo_config, self.repo_config_path

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        config, config_path = self._target(global_config)

        if not config.has_section(section):
            config.add_section(section)
        config.set(section, key, value)

        with open(config_path, 'w') as f:
            config.write(f)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a configuration value.

        Returns:
            True if value was removed, False if it didn't exist
        """
        config, config_path = self._target(global_config)

        if not config.has_option(section, key):
            return False

        config.remove_option(section, key)
        if not config.options(section):
            config.remove_section(section)

        with open(config_path, 'w') as f:
            config.write(f)

        return True

    def list_all(self, global_only: bool = False, repo_only: bool = False) -> Dict[str, Dict[str, str]]:
        """
        List all configuration values.

        Returns:
            Dict of sections to key-value dicts; repository values
            override global ones
        """
        result: Dict[str, Dict[str, str]] = {}

        sources = []
        if not repo_only:
            sources.append(self.global_config)
        if not global_only and self.repo_config:
            sources.append(self.repo_config)

        for config in sources:
            for section in config.sections():
                result.setdefault(section, {}).update(config.items(section))

        return result

    def get_user_identity(self) -> str:
        """
        Get the "Name <email>" identity used for commits.

        Falls back to a fixed placeholder identity when unset.
        """
        name = self.get('user', 'name', DEFAULT_NAME)
        email = self.get('user', 'email', DEFAULT_EMAIL)
        return f"{name} <{email}>"


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config
    """
    if repo:
        return Config(repo.config_file)
    return Config()
