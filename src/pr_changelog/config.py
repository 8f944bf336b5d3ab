"""
Configuration Management

Changelog and logging settings
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from pathlib import Path
import logging

from pydantic import ValidationError

from .models.configuration import Category, Transformer, ChangelogConfigRequest


DEFAULT_SORT = "DESC"
DEFAULT_PR_TEMPLATE = "- ${{TITLE}}\n   - PR: #${{NUMBER}}"
DEFAULT_TEMPLATE = (
    "${{CHANGELOG}}\n\n"
    "<details>\n"
    "<summary>Uncategorized</summary>\n\n"
    "${{UNCATEGORIZED}}\n"
    "</details>"
)

# Keys accepted at the top level of a flat configuration file
_CHANGELOG_KEYS = ('sort', 'template', 'pr_template', 'categories', 'transformers')


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be read or parsed"""


@dataclass
class ChangelogConfig:
    """Changelog rendering settings"""
    sort: str = DEFAULT_SORT
    template: str = DEFAULT_TEMPLATE
    pr_template: str = DEFAULT_PR_TEMPLATE
    categories: List[Category] = field(default_factory=list)
    transformers: List[Transformer] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ChangelogConfig":
        """Validate a raw changelog section and fill in defaults"""
        request = ChangelogConfigRequest(**(data or {}))

        return cls(
            sort=request.sort or DEFAULT_SORT,
            template=request.template if request.template is not None else DEFAULT_TEMPLATE,
            pr_template=request.pr_template if request.pr_template is not None else DEFAULT_PR_TEMPLATE,
            categories=[c.to_category() for c in request.categories or []],
            transformers=[t.to_transformer() for t in request.transformers or []],
        )


@dataclass
class LoggingConfig:
    """Logging settings"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """Application settings"""
    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load settings from environment variables"""
        return cls(
            changelog=ChangelogConfig(
                sort=os.getenv("CHANGELOG_SORT", DEFAULT_SORT),
                template=os.getenv("CHANGELOG_TEMPLATE", DEFAULT_TEMPLATE),
                pr_template=os.getenv("CHANGELOG_PR_TEMPLATE", DEFAULT_PR_TEMPLATE),
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            ),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    @classmethod
    def from_dict(cls, config_data: Optional[Dict[str, Any]]) -> "AppConfig":
        """
        Build settings from a parsed configuration document.

        Accepts either a nested ``changelog`` section or the flat layout
        with ``sort``/``template``/``pr_template``/``categories``/``transformers``
        at the top level.
        """
        config_data = config_data or {}
        if not isinstance(config_data, dict):
            raise ConfigError("Configuration root must be a mapping")

        if 'changelog' in config_data:
            changelog_data = config_data.get('changelog') or {}
        else:
            changelog_data = {k: v for k, v in config_data.items() if k in _CHANGELOG_KEYS}

        try:
            changelog = ChangelogConfig.from_dict(changelog_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid changelog configuration: {e}") from e

        return cls(
            changelog=changelog,
            logging=LoggingConfig(**(config_data.get('logging') or {})),
            debug=config_data.get('debug', False),
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """Load settings from a YAML (or JSON) file"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse config file {config_path}: {e}") from e

        return cls.from_dict(config_data)

    def validate(self) -> None:
        """Validate settings"""
        errors = []

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if self.logging.max_file_size <= 0:
            errors.append("Log max file size must be positive")

        if self.logging.backup_count < 0:
            errors.append("Log backup count must be non-negative")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a dictionary"""
        return {
            'changelog': {
                'sort': self.changelog.sort,
                'template': self.changelog.template,
                'pr_template': self.changelog.pr_template,
                'categories': [
                    {'title': c.title, 'labels': list(c.labels)}
                    for c in self.changelog.categories
                ],
                'transformers': [
                    {'pattern': t.pattern, 'target': t.target}
                    for t in self.changelog.transformers
                ],
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'debug': self.debug,
        }


class ConfigManager:
    """Configuration manager"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._file_handler: Optional[logging.Handler] = None
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """Return current settings"""
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update settings"""
        config_dict = self._config.to_dict()

        for key, value in kwargs.items():
            if '.' in key:
                # nested setting (e.g. 'changelog.sort')
                section, name = key.split('.', 1)
                if section in config_dict:
                    config_dict[section][name] = value
            else:
                config_dict[key] = value

        self._config = AppConfig.from_dict(config_dict)
        self._config.validate()
        self._setup_logging()

    def _setup_logging(self) -> None:
        """Configure logging"""
        level = logging.DEBUG if self._config.debug else getattr(logging, self._config.logging.level.upper())
        logging.basicConfig(
            level=level,
            format=self._config.logging.format,
        )

        root_logger = logging.getLogger()

        # replace the handler from a previous setup
        if self._file_handler is not None:
            root_logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None

        # rotate when logging to a file
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            handler = RotatingFileHandler(
                self._config.logging.file_path,
                maxBytes=self._config.logging.max_file_size,
                backupCount=self._config.logging.backup_count,
            )
            handler.setFormatter(logging.Formatter(self._config.logging.format))

            root_logger.addHandler(handler)
            self._file_handler = handler
