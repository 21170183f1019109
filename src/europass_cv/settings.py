"""
Settings file support for Europass CV.

Provides:
- Settings dataclasses holding project defaults
- TOML settings loading (europass_cv.toml)
- Precedence: CLI > CV config hints > settings file > defaults
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .dictionary import DEFAULT_LANGUAGE, normalize_language
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_NAME = "europass_cv.toml"
DEFAULT_PDF_PATH = "./cv-europass.pdf"
DEFAULT_SAVED_CONFIG_PATH = "./configs/cv-config.json"

SAMPLE_SETTINGS = f"""\
# Europass CV settings. Command-line flags override these values.

[render]
# "PT" or "EN"
language = "{DEFAULT_LANGUAGE}"
# Logo used when the CV config has no logoPath (empty = placeholder mark)
logo_path = ""
draft = false

[output]
pdf = "{DEFAULT_PDF_PATH}"
# Where configs collected interactively are saved
config = "{DEFAULT_SAVED_CONFIG_PATH}"

[pdf]
format = "A4"
margin = "10mm"
timeout_ms = 30000

[logging]
level = "WARNING"
log_file = ""
"""


@dataclass
class RenderSettings:
    """Rendering defaults."""

    language: str = DEFAULT_LANGUAGE
    logo_path: Optional[str] = None
    draft: bool = False


@dataclass
class OutputSettings:
    """Default output locations."""

    pdf: str = DEFAULT_PDF_PATH
    config: str = DEFAULT_SAVED_CONFIG_PATH


@dataclass
class PdfSettings:
    """Options passed to the PDF backend."""

    format: str = "A4"
    margin: str = "10mm"
    timeout_ms: int = 30000


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "WARNING"
    log_file: Optional[str] = None


@dataclass
class Settings:
    """Complete settings for Europass CV."""

    render: RenderSettings = field(default_factory=RenderSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    pdf: PdfSettings = field(default_factory=PdfSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    settings_path: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], settings_path: Optional[Path] = None) -> "Settings":
        """Create Settings from a dictionary (parsed TOML)."""
        render_data = data.get("render", {})
        output_data = data.get("output", {})
        pdf_data = data.get("pdf", {})
        logging_data = data.get("logging", {})

        try:
            timeout_ms = int(pdf_data.get("timeout_ms", 30000))
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"pdf.timeout_ms must be an integer, got {pdf_data.get('timeout_ms')!r}"
            )

        return cls(
            render=RenderSettings(
                language=normalize_language(render_data.get("language", DEFAULT_LANGUAGE)),
                logo_path=render_data.get("logo_path") or None,
                draft=bool(render_data.get("draft", False)),
            ),
            output=OutputSettings(
                pdf=output_data.get("pdf") or DEFAULT_PDF_PATH,
                config=output_data.get("config") or DEFAULT_SAVED_CONFIG_PATH,
            ),
            pdf=PdfSettings(
                format=pdf_data.get("format", "A4"),
                margin=pdf_data.get("margin", "10mm"),
                timeout_ms=timeout_ms,
            ),
            logging=LoggingSettings(
                level=logging_data.get("level", "WARNING"),
                log_file=logging_data.get("log_file") or None,
            ),
            settings_path=settings_path,
        )


def find_settings_file(settings_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find the settings file.

    Search order:
    1. Explicit path if provided (must exist)
    2. europass_cv.toml in the current directory

    Returns:
        Path to the settings file, or None if not found.
    """
    if settings_path is not None:
        if settings_path.exists():
            return settings_path
        raise ConfigurationError(f"Settings file not found: {settings_path}")

    cwd_settings = Path.cwd() / DEFAULT_SETTINGS_NAME
    if cwd_settings.exists():
        return cwd_settings

    return None


def load_settings(settings_path: Optional[Path] = None) -> Settings:
    """
    Load settings from a TOML file.

    If no settings file is found, returns the defaults.

    Raises:
        ConfigurationError: If the file exists but cannot be parsed.
    """
    settings_file = find_settings_file(settings_path)

    if settings_file is None:
        logger.debug("No settings file found, using defaults")
        return Settings()

    logger.debug(f"Loading settings from: {settings_file}")

    try:
        with open(settings_file, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {settings_file}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Cannot read settings file {settings_file}: {e}")

    settings = Settings.from_dict(data, settings_path=settings_file)
    logger.info(f"Loaded settings from: {settings_file}")
    return settings


def write_sample_settings(path: Path, force: bool = False) -> Path:
    """
    Write a commented sample settings file.

    Raises:
        ConfigurationError: If the file exists and ``force`` is False.
    """
    if path.exists() and not force:
        raise ConfigurationError(f"Settings file already exists: {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(SAMPLE_SETTINGS, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write settings file {path}: {e}")
    logger.info(f"Wrote sample settings to: {path}")
    return path
