"""
Configuration Settings
======================

Configuration dataclasses for the validation gate.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring {name}={value!r}: not an integer")
        return default


@dataclass
class EngineConfig:
    """Process-wide engine settings. Only the first initialization applies them."""

    # Serialize every compile/parse/check behind one process-wide lock.
    serialize_engine_calls: bool = True
    # Route libxml2 errors to the ``xsdguard.engine.libxml2`` logger, on every
    # thread that runs engine work.
    forward_engine_log: bool = False


@dataclass
class ParserConfig:
    """Settings for the fresh parser created per validation call."""

    resolve_entities: bool = False
    no_network: bool = True
    huge_tree: bool = False
    remove_comments: bool = False
    remove_blank_text: bool = False
    max_document_bytes: int = 0  # 0 = unlimited


@dataclass
class CacheConfig:
    """Compiled schema cache settings."""

    enabled: bool = True
    max_entries: int = 16


@dataclass
class APIConfig:
    """HTTP gate settings."""

    host: str = "0.0.0.0"
    port: int = 8000
    schema_dir: str = "schemas"


@dataclass
class GuardConfig:
    """
    Complete configuration.

    Example:
        config = GuardConfig()
        config.parser.max_document_bytes = 10 * 1024 * 1024
        config.api.schema_dir = "/srv/schemas"
        save_config(config, Path("xsdguard.yaml"))
    """

    engine: EngineConfig = field(default_factory=EngineConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    api: APIConfig = field(default_factory=APIConfig)

    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'engine': asdict(self.engine),
            'parser': asdict(self.parser),
            'cache': asdict(self.cache),
            'api': asdict(self.api),
            'log_level': self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GuardConfig':
        """Create from dictionary. Missing sections keep their defaults."""
        config = cls()

        if 'engine' in data:
            config.engine = EngineConfig(**data['engine'])
        if 'parser' in data:
            config.parser = ParserConfig(**data['parser'])
        if 'cache' in data:
            config.cache = CacheConfig(**data['cache'])
        if 'api' in data:
            config.api = APIConfig(**data['api'])

        if 'log_level' in data:
            config.log_level = data['log_level']

        return config

    @classmethod
    def from_env(cls) -> 'GuardConfig':
        """
        Create configuration from environment variables.

        Environment variable naming:
        - XSDGUARD_SERIALIZE
        - XSDGUARD_FORWARD_ENGINE_LOG
        - XSDGUARD_MAX_DOCUMENT_BYTES
        - XSDGUARD_CACHE_ENABLED
        - XSDGUARD_CACHE_SIZE
        - XSDGUARD_SCHEMA_DIR
        - XSDGUARD_API_HOST
        - XSDGUARD_API_PORT
        - XSDGUARD_LOG_LEVEL
        """
        config = cls()

        # Engine settings
        if env_serialize := os.environ.get("XSDGUARD_SERIALIZE"):
            config.engine.serialize_engine_calls = env_serialize.lower() in _TRUE_VALUES
        if env_forward := os.environ.get("XSDGUARD_FORWARD_ENGINE_LOG"):
            config.engine.forward_engine_log = env_forward.lower() in _TRUE_VALUES

        # Parser settings
        config.parser.max_document_bytes = _env_int(
            "XSDGUARD_MAX_DOCUMENT_BYTES", config.parser.max_document_bytes
        )

        # Cache settings
        if env_cache := os.environ.get("XSDGUARD_CACHE_ENABLED"):
            config.cache.enabled = env_cache.lower() in _TRUE_VALUES
        config.cache.max_entries = _env_int("XSDGUARD_CACHE_SIZE", config.cache.max_entries)

        # API settings
        if env_schema_dir := os.environ.get("XSDGUARD_SCHEMA_DIR"):
            config.api.schema_dir = env_schema_dir
        if env_host := os.environ.get("XSDGUARD_API_HOST"):
            config.api.host = env_host
        config.api.port = _env_int("XSDGUARD_API_PORT", config.api.port)

        if env_level := os.environ.get("XSDGUARD_LOG_LEVEL"):
            config.log_level = env_level.upper()

        return config


def load_config(config_path: Union[str, Path]) -> GuardConfig:
    """
    Load configuration from file.

    Supports JSON and YAML formats based on file extension.

    Args:
        config_path: Path to config file

    Returns:
        GuardConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is not supported
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    with open(config_path, 'r', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(f) or {}
        elif suffix == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    logger.info(f"Loaded configuration from {config_path}")
    return GuardConfig.from_dict(data)


def save_config(config: GuardConfig, config_path: Union[str, Path]) -> None:
    """
    Save configuration to file.

    Supports JSON and YAML formats based on file extension.

    Args:
        config: GuardConfig to save
        config_path: Path to save config file

    Raises:
        ValueError: If file format is not supported
    """
    config_path = Path(config_path)
    suffix = config_path.suffix.lower()
    if suffix not in ['.yaml', '.yml', '.json']:
        raise ValueError(f"Unsupported config format: {suffix}")

    data = config.to_dict()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        if suffix == '.json':
            json.dump(data, f, indent=2)
        else:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved configuration to {config_path}")


def validate_config(config: GuardConfig) -> List[str]:
    """
    Check a configuration for obvious mistakes.

    Returns:
        List of problems, empty if the configuration is usable
    """
    errors = []

    if config.parser.max_document_bytes < 0:
        errors.append("parser.max_document_bytes must be >= 0")
    if config.cache.max_entries < 1:
        errors.append("cache.max_entries must be >= 1")
    if config.api.port < 1 or config.api.port > 65535:
        errors.append("API port must be between 1 and 65535")
    if logging.getLevelName(config.log_level.upper()) == f"Level {config.log_level.upper()}":
        errors.append(f"Unknown log level: {config.log_level}")

    return errors


_global_config: Optional[GuardConfig] = None


def get_config() -> GuardConfig:
    """Get or create the process default configuration (from environment)."""
    global _global_config
    if _global_config is None:
        _global_config = GuardConfig.from_env()
    return _global_config


def set_config(config: Optional[GuardConfig]) -> None:
    """Replace the process default configuration (None re-reads the environment)."""
    global _global_config
    _global_config = config
