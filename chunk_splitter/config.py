"""
Configuration management for Chunk Splitter.

Loads splitter.yaml with validation, environment overrides, and type checking.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv

from chunk_splitter.splitter.options import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    ChunkStrategy,
    SplitOptions,
    SplitOptionsError,
)
from chunk_splitter.splitter.length import token_length_function

DEFAULT_CONFIG_PATH = "./configs/splitter.yaml"

# Environment variable -> (section, key, type)
ENV_OVERRIDES = {
    'CHUNK_SPLITTER_CHUNK_SIZE': ('splitter', 'chunk_size', int),
    'CHUNK_SPLITTER_CHUNK_OVERLAP': ('splitter', 'chunk_overlap', int),
    'CHUNK_SPLITTER_STRATEGY': ('splitter', 'chunk_strategy', str),
}


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


class SplitterConfig:
    """
    Configuration manager with strict validation.

    Enforces:
    - Known top-level sections only
    - Integer chunk sizes, known strategy names
    - Environment overrides applied after the file
    """

    KNOWN_SECTIONS = ['splitter', 'audit_log']

    DEFAULTS = {
        'splitter': {
            'chunk_size': DEFAULT_CHUNK_SIZE,
            'chunk_overlap': DEFAULT_CHUNK_OVERLAP,
            'chunk_strategy': ChunkStrategy.CHARACTER.value,
            'length': {'tokenizer': None},
        },
        'audit_log': {'enabled': False, 'file': './audit.log', 'level': 'INFO'},
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Load and validate configuration.

        Args:
            config_path: Path to splitter.yaml. Defaults to $CHUNK_SPLITTER_CONFIG,
                then ./configs/splitter.yaml (optional)

        Raises:
            ConfigError: If config invalid or an explicit file is missing
        """
        load_dotenv()

        explicit = config_path is not None or "CHUNK_SPLITTER_CONFIG" in os.environ
        if config_path is None:
            config_path = os.getenv("CHUNK_SPLITTER_CONFIG", DEFAULT_CONFIG_PATH)

        self.config_path = Path(config_path)
        self.data = _merge(self.DEFAULTS, {})

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML: {e}")
            if not isinstance(loaded, dict):
                raise ConfigError(f"Config root must be a mapping: {self.config_path}")
            self.data = _merge(self.data, loaded)
        elif explicit:
            raise ConfigError(f"Config file not found: {self.config_path}")

        self._check_sections()
        self._apply_env_overrides()
        self._validate()

    def _check_sections(self):
        """Reject unknown or non-mapping top-level sections."""
        for key in self.data:
            if key not in self.KNOWN_SECTIONS:
                raise ConfigError(f"Unknown config section: {key}")
            if not isinstance(self.data[key], dict):
                raise ConfigError(f"Config section must be a mapping: {key}")

    def _apply_env_overrides(self):
        """Apply CHUNK_SPLITTER_* environment variables."""
        for env_name, (section, key, cast) in ENV_OVERRIDES.items():
            raw = os.getenv(env_name)
            if raw is None or raw == '':
                continue
            try:
                self.data[section][key] = cast(raw)
            except ValueError:
                raise ConfigError(f"Invalid value for {env_name}: {raw!r}")

    def _validate(self):
        """Validate configuration values."""
        splitter_cfg = self.data['splitter']
        for key in ('chunk_size', 'chunk_overlap'):
            value = splitter_cfg.get(key)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"splitter.{key} must be an integer, got {value!r}")

        try:
            ChunkStrategy.parse(splitter_cfg.get('chunk_strategy'))
        except SplitOptionsError as e:
            raise ConfigError(str(e))

        level = str(self.get('audit_log.level', 'INFO')).upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR'):
            raise ConfigError(f"Invalid audit log level: {level}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value by dot-notation path.

        Args:
            key: Key path (e.g., 'splitter.chunk_size', 'audit_log.file')
            default: Default value if not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.data

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_splitter_config(self) -> Dict[str, Any]:
        """Get splitter configuration section."""
        return self.data.get('splitter', {})

    def get_audit_config(self) -> Dict[str, Any]:
        """Get audit logging configuration section."""
        return self.data.get('audit_log', {'enabled': False, 'file': './audit.log'})

    def get_tokenizer(self) -> Optional[str]:
        """Get tiktoken encoding name for token lengths, if configured."""
        return self.get('splitter.length.tokenizer')

    def to_split_options(self, **overrides) -> SplitOptions:
        """
        Build validated SplitOptions from this config.

        Args:
            **overrides: Option values taking precedence (None values ignored)

        Returns:
            SplitOptions

        Raises:
            ConfigError: If the resulting options are malformed
        """
        splitter_cfg = self.get_splitter_config()
        values = {
            'chunk_size': splitter_cfg.get('chunk_size'),
            'chunk_overlap': splitter_cfg.get('chunk_overlap'),
            'chunk_strategy': splitter_cfg.get('chunk_strategy'),
        }
        tokenizer = overrides.pop('tokenizer', None) or self.get_tokenizer()
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            if tokenizer and values.get('length_function') is None:
                values['length_function'] = token_length_function(tokenizer)
            return SplitOptions.from_dict(values)
        except SplitOptionsError as e:
            raise ConfigError(str(e))


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two config dicts without mutating either."""
    merged = {}
    for key, value in base.items():
        merged[key] = _merge(value, {}) if isinstance(value, dict) else value
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# Global config instance (lazy-loaded)
_config_instance: Optional[SplitterConfig] = None


def load_config(config_path: Optional[str] = None) -> SplitterConfig:
    """
    Load or retrieve cached configuration.

    Args:
        config_path: Optional override path

    Returns:
        SplitterConfig instance
    """
    global _config_instance
    if _config_instance is None or config_path is not None:
        _config_instance = SplitterConfig(config_path)
    return _config_instance


def get_config() -> SplitterConfig:
    """Get currently loaded config (must be initialized)."""
    global _config_instance
    if _config_instance is None:
        raise RuntimeError("Config not loaded. Call load_config() first.")
    return _config_instance
