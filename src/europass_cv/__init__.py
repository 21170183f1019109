"""
Europass CV - render résumé configs to self-contained HTML and PDF.

This package provides:
- A small CV config model and its validator
- Portuguese and English label sets
- An HTML renderer with inline images and stylesheet
- A Playwright PDF backend and the `europass-cv` command
"""

__version__ = "1.0.0"
__author__ = "Europass CV Contributors"

from .assets import EmbeddedAsset, image_to_data_url
from .dictionary import get_dictionary
from .io import load_cv_config, save_cv_config
from .model import CvConfig, validate_config
from .render import generate_html

__all__ = [
    # Model
    "CvConfig",
    "validate_config",
    # Rendering
    "generate_html",
    "get_dictionary",
    "image_to_data_url",
    "EmbeddedAsset",
    # IO utilities
    "load_cv_config",
    "save_cv_config",
    # Version
    "__version__",
]
