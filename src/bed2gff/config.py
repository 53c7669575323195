"""Configuration management for bed2gff.

Configuration comes from default values, an optional TOML file and
command-line overrides.

Example TOML file::

    [output]
    source = "my_pipeline"
    contact = "annotation@example.org"

    [logging]
    verbosity = 2
    progress_interval = 50000

Example:
    >>> from bed2gff.config import Config
    >>> config = Config.load("bed2gff.toml")
    >>> config.output.source
    'my_pipeline'
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import attrs

from bed2gff import __version__

# =============================================================================
# Default Configuration Values
# =============================================================================

DEFAULT_SOURCE = "bed2gff"
DEFAULT_PROVIDER = "bed2gff"
DEFAULT_CONTACT = "github.com/alejandrogzi/bed2gff"

DEFAULT_VERBOSITY = 1
DEFAULT_PROGRESS_INTERVAL = 10_000


def _non_empty(instance, attribute, value) -> None:
    if not value or not str(value).strip():
        raise ValueError(f"{attribute.name} must not be empty")


# =============================================================================
# Configuration Classes
# =============================================================================


@attrs.define
class OutputConfig:
    """Configuration for the GFF3 output.

    Attributes:
        source: Value of the source column.
        provider: Tool named in the #provider header line.
        contact: Value of the #contact header line.
        version: Value of the #version header line.
    """

    source: str = attrs.field(default=DEFAULT_SOURCE, validator=_non_empty)
    provider: str = attrs.field(default=DEFAULT_PROVIDER, validator=_non_empty)
    contact: str = DEFAULT_CONTACT
    version: str = __version__


@attrs.define
class LoggingConfig:
    """Configuration for logging.

    Attributes:
        verbosity: 0=warning, 1=info, 2=debug.
        log_file: Optional file receiving debug output.
        progress_interval: Transcripts between progress messages.
    """

    verbosity: int = attrs.field(
        default=DEFAULT_VERBOSITY, validator=attrs.validators.in_((0, 1, 2))
    )
    log_file: Path | None = attrs.field(
        default=None, converter=attrs.converters.optional(Path)
    )
    progress_interval: int = attrs.field(
        default=DEFAULT_PROGRESS_INTERVAL, validator=attrs.validators.gt(0)
    )


@attrs.define
class Config:
    """Main configuration container for bed2gff.

    Attributes:
        output: GFF3 output configuration.
        logging: Logging configuration.
    """

    output: OutputConfig = attrs.Factory(OutputConfig)
    logging: LoggingConfig = attrs.Factory(LoggingConfig)

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load configuration from a TOML file.

        Args:
            path: Path to configuration file.
                  If None, returns default configuration.

        Returns:
            Loaded configuration object.

        Raises:
            FileNotFoundError: If configuration file doesn't exist.
            ValueError: If configuration file is invalid.
        """
        if path is None:
            return cls()

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Build a configuration from nested dictionaries.

        Raises:
            ValueError: On unknown sections, unknown keys or invalid values.
        """
        sections = {"output": OutputConfig, "logging": LoggingConfig}

        unknown = set(data) - set(sections)
        if unknown:
            raise ValueError(f"Unknown configuration section(s): {', '.join(sorted(unknown))}")

        kwargs = {}
        for name, section_cls in sections.items():
            values = data.get(name, {})
            if not isinstance(values, dict):
                raise ValueError(f"Configuration section [{name}] must be a table")
            fields = {f.name for f in attrs.fields(section_cls)}
            bad = set(values) - fields
            if bad:
                raise ValueError(f"Unknown key(s) in [{name}]: {', '.join(sorted(bad))}")
            try:
                kwargs[name] = section_cls(**values)
            except TypeError as e:
                raise ValueError(f"Invalid value in [{name}]: {e}") from e

        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration.
        """
        return attrs.asdict(self)
