"""Configuration for branchdiff."""

from branchdiff.config.config_loader import ConfigError, ConfigFileNotFoundError, ConfigLoader, ConfigParsingError
from branchdiff.config.config_schema import AppConfigSchema, DiffSchema, DownloadSchema, RepositorySchema

__all__ = [
	"AppConfigSchema",
	"ConfigError",
	"ConfigFileNotFoundError",
	"ConfigLoader",
	"ConfigParsingError",
	"DiffSchema",
	"DownloadSchema",
	"RepositorySchema",
]
