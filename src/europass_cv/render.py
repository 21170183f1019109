"""
HTML rendering for Europass CV.

Provides the functions for:
- Composing the optional content sections in their fixed order
- Laying out the personal-details panel
- Assembling the final self-contained HTML document

Rendering is a pure transform: the same config and options always produce
the same HTML, and nothing is kept between calls apart from the shared
Jinja2 environment and stylesheet.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

from jinja2.exceptions import TemplateError as JinjaTemplateError
from markupsafe import Markup

from .assets import EmbeddedAsset, image_to_data_url
from .dictionary import Dictionary, get_dictionary, normalize_language
from .errors import TemplateError
from .jinja_env import create_jinja_env, load_stylesheet
from .model import SECTION_ORDER, CvConfig, Personal, Sections

logger = logging.getLogger(__name__)

# Static two-column split of the personal panel; everything else goes right
LEFT_COLUMN_FIELDS = frozenset({"nationality", "email", "address"})


@dataclass(frozen=True)
class SectionFragment:
    """A rendered section block."""

    key: str
    html: Markup


def section_data(sections: Sections, key: str) -> Any:
    """
    Return what a section renders, or an empty value when it is omitted.

    Items missing their required fields (role, title, language/level) are
    dropped here, so a list of only malformed items omits the section.
    """
    if key == "presentation":
        return sections.presentation
    if key == "objective":
        return sections.objective
    if key == "experience":
        return tuple(item for item in sections.experience if item.role)
    if key == "education":
        return tuple(item for item in sections.education if item.title)
    if key == "languages":
        return tuple(item for item in sections.languages if item.language and item.level)
    if key == "skills":
        return sections.skills
    raise KeyError(f"Unknown section: {key}")


def _render_template(template_name: str, **context: Any) -> str:
    env = create_jinja_env()
    try:
        return env.get_template(template_name).render(**context)
    except JinjaTemplateError as e:
        raise TemplateError(f"Error rendering {template_name}: {e}") from e


def compose_sections(config: CvConfig, labels: Dictionary) -> List[SectionFragment]:
    """
    Render every non-empty section.

    Args:
        config: The CV config.
        labels: Localized labels used as section headings.

    Returns:
        Fragments in the fixed order presentation, objective, experience,
        education, languages, skills.
    """
    fragments = []
    for key in SECTION_ORDER:
        data = section_data(config.sections, key)
        if not data:
            logger.debug(f"Section '{key}' is empty, skipping")
            continue
        html = _render_template(
            f"sections/{key}.html",
            key=key,
            title=labels.label(key),
            data=data,
        )
        fragments.append(SectionFragment(key=key, html=Markup(html.strip())))
    return fragments


def personal_columns(
    personal: Personal,
    labels: Dictionary,
) -> List[List[Tuple[str, str]]]:
    """
    Lay out the personal-details panel as two fixed columns.

    Nationality, email and address always go left; sex and phone always go
    right, whatever else is present. Returns an empty list when no optional
    field is set, so the panel is omitted.
    """
    items = personal.present_fields()
    if not items:
        return []
    left = [(labels.label(key), value) for key, value in items if key in LEFT_COLUMN_FIELDS]
    right = [(labels.label(key), value) for key, value in items if key not in LEFT_COLUMN_FIELDS]
    return [left, right]


def _embed(kind: str, path: Optional[str], base_dir: Optional[Path]) -> EmbeddedAsset:
    asset = image_to_data_url(path, base_dir)
    if path and not asset.is_present:
        logger.warning(f"{kind} not embedded: {asset.error}")
    return asset


def generate_html(
    config: Union[CvConfig, Mapping[str, Any]],
    *,
    photo_path: Optional[str] = None,
    logo_path: Optional[str] = None,
    draft: bool = False,
    lang: Optional[str] = None,
    base_dir: Optional[Path] = None,
) -> str:
    """
    Render a CV config to a self-contained HTML document.

    The config is assumed to be valid already (see ``validate_config``).

    Args:
        config: CvConfig, or its JSON form.
        photo_path: Photo to use instead of ``personal.photoPath``.
        logo_path: Logo to use instead of ``logoPath``. Without any logo a
            placeholder mark is drawn.
        draft: Overlay the localized "draft" watermark.
        lang: "PT" (default) or "EN".
        base_dir: Directory relative image paths are resolved against.

    Returns:
        The HTML document as a string.
    """
    if not isinstance(config, CvConfig):
        config = CvConfig.from_dict(config)

    lang = normalize_language(lang)
    labels = get_dictionary(lang)

    photo = _embed("Photo", photo_path or config.personal.photo_path, base_dir)
    logo = _embed("Logo", logo_path or config.logo_path, base_dir)

    sections = compose_sections(config, labels)
    logger.debug(
        f"Rendering CV for {config.personal.name!r} ({lang}) with sections: "
        f"{', '.join(f.key for f in sections) or 'none'}"
    )

    return _render_template(
        "document.html",
        html_lang=lang.lower(),
        name=config.personal.name,
        photo=photo,
        logo=logo,
        personal_columns=personal_columns(config.personal, labels),
        draft_label=labels.draft if draft else "",
        sections=sections,
        stylesheet=Markup(load_stylesheet()),
    )
