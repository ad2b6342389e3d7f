"""Configuration management for Schema Translator."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.common import Visibility


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="json", description="Log format ('json' or 'console')")
    file: Optional[Path] = Field(default=None, description="Log file path")


class PluginConfig(BaseModel):
    """Where parser and producer plugins are looked up, and which function they expose."""

    parser_namespace: str = Field(default="schema_translator.parsers", description="Package prefix for short parser names.")
    producer_namespace: str = Field(default="schema_translator.producers", description="Package prefix for short producer names.")
    parser_function: str = Field(default="parse", description="Function bound when a parser module is loaded.")
    producer_function: str = Field(default="produce", description="Function bound when a producer module is loaded.")


class InputConfig(BaseModel):
    """Configuration for reading translation input."""

    encoding: str = Field(default="utf-8", description="Encoding used for files, binary streams and byte buffers.")


class ExtractionConfig(BaseModel):
    """Defaults for the UML class-model extractor."""

    visibility: Optional[Visibility] = Field(default=None, description="Visibility filter for classes and attributes. None translates everything.")
    primary_key_stereotype: str = Field(default="PK", description="Attribute stereotype marking a primary key field.")


class Config(BaseSettings):
    """Main configuration for Schema Translator. Loads from environment variables prefixed with SCHEMA_TRANSLATOR_."""

    model_config = SettingsConfigDict(
        env_prefix='SCHEMA_TRANSLATOR_',
        env_nested_delimiter='__', # e.g., SCHEMA_TRANSLATOR_LOGGING__LEVEL
        extra='ignore',
        env_file='.env',
        env_file_encoding='utf-8'
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    plugins: PluginConfig = Field(default_factory=PluginConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    default_parser: Optional[str] = Field(default=None, description="Parser identifier used when none is given. None means pass-through.")
    default_producer: Optional[str] = Field(default=None, description="Producer identifier used when none is given. None means pass-through.")

    @classmethod
    def from_file(cls, file_path: Path) -> "Config":
        """Create configuration strictly from a JSON file.
        Environment variables are not layered on top.
        """
        with open(file_path) as f:
            config_data = json.load(f)
        return cls.model_validate(config_data)
