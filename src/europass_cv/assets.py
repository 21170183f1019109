"""
Image embedding for Europass CV.

Turns photo and logo files into ``data:`` URLs so the rendered HTML carries
no external file references. Reading never raises: an unreadable file yields
an absent :class:`EmbeddedAsset` and the renderer falls back to omitting the
image (photo) or drawing a placeholder (logo).
"""

import base64
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from .model import CvConfig

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"

MIME_TYPES: Dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


class AssetType(Enum):
    """Type of asset reference."""

    PHOTO = "photo"
    LOGO = "logo"


@dataclass(frozen=True)
class EmbeddedAsset:
    """
    Result of embedding an image.

    Attributes:
        path: The path as given by the caller.
        data_url: ``data:<mime>;base64,<payload>`` when present, else "".
        error: Why the asset is absent, if it is.
    """

    path: str
    data_url: str = ""
    error: Optional[str] = None

    @property
    def is_present(self) -> bool:
        """True if the image was read and can be embedded."""
        return bool(self.data_url) and self.error is None

    @classmethod
    def absent(cls, path: str, reason: str) -> "EmbeddedAsset":
        return cls(path=path, error=reason)


@dataclass(frozen=True)
class AssetReference:
    """An image path referenced by a CV config."""

    path: str
    asset_type: AssetType
    source_key: str


def get_mime_type(path: Union[str, Path]) -> str:
    """Infer the MIME type from the file extension (unknown → image/jpeg)."""
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


def resolve_asset_path(path: Union[str, Path], base_dir: Optional[Path] = None) -> Path:
    """Resolve ``path`` against ``base_dir`` (current directory by default)."""
    asset_path = Path(path).expanduser()
    if asset_path.is_absolute():
        return asset_path
    return (base_dir if base_dir is not None else Path.cwd()) / asset_path


def image_to_data_url(
    path: Union[str, Path, None],
    base_dir: Optional[Path] = None,
) -> EmbeddedAsset:
    """
    Read an image and encode it as a data URL.

    Args:
        path: Image path, absolute or relative to ``base_dir``.
        base_dir: Directory relative paths are resolved against.

    Returns:
        EmbeddedAsset; absent (never an exception) when the file cannot be read.
    """
    if path is None or not str(path).strip():
        return EmbeddedAsset.absent("", "Empty asset path")

    path_str = str(path)

    try:
        full_path = resolve_asset_path(path_str, base_dir)
        payload = full_path.read_bytes()
    except (OSError, ValueError, RuntimeError) as e:
        # RuntimeError: "~user" with no such user
        logger.debug(f"Asset unavailable: {path_str} ({e})")
        return EmbeddedAsset.absent(path_str, f"Cannot read {path_str}: {e}")

    encoded = base64.b64encode(payload).decode("ascii")
    return EmbeddedAsset(
        path=path_str,
        data_url=f"data:{get_mime_type(path_str)};base64,{encoded}",
    )


def discover_asset_references(
    config: CvConfig,
    logo_path: Optional[str] = None,
) -> List[AssetReference]:
    """
    List the image paths a config will try to embed.

    Args:
        config: The CV config.
        logo_path: Logo override; falls back to ``config.logo_path``.
    """
    assets = []
    if config.personal.photo_path.strip():
        assets.append(AssetReference(
            path=config.personal.photo_path,
            asset_type=AssetType.PHOTO,
            source_key="personal.photoPath",
        ))
    logo = logo_path or config.logo_path
    if logo and logo.strip():
        assets.append(AssetReference(
            path=logo,
            asset_type=AssetType.LOGO,
            source_key="logoPath",
        ))
    return assets


def check_assets(
    config: CvConfig,
    base_dir: Optional[Path] = None,
    logo_path: Optional[str] = None,
) -> List[EmbeddedAsset]:
    """Return the absent assets among those referenced by ``config``."""
    missing = []
    for ref in discover_asset_references(config, logo_path=logo_path):
        try:
            found = resolve_asset_path(ref.path, base_dir).is_file()
        except (OSError, ValueError, RuntimeError):
            found = False
        if not found:
            missing.append(EmbeddedAsset.absent(ref.path, f"{ref.source_key}: file not found"))
    return missing
