"""
CV configuration model for Europass CV.

The JSON shape mirrors the config files users write by hand:

    {
      "outputPdf": "./cv.pdf",
      "logoPath": "assets/europass.png",
      "personal": {"name": "Ana Silva", "photoPath": "pics/ana.jpg", ...},
      "sections": {
        "presentation": {"text": "..."},
        "objective": {"text": "..."},
        "experience": [{"from": "2019", "to": "2024", "role": "...", ...}],
        "education": [{"title": "...", "institution": "..."}],
        "languages": [{"language": "Português", "level": "Materna"}],
        "skills": ["Go", "SQL"]
      }
    }

Instances are built once (by the loader, the interactive collector or a
caller) and passed read-only to the renderer.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# Optional personal fields in panel priority order
PERSONAL_FIELDS: Tuple[str, ...] = ("nationality", "sex", "email", "phone", "address")

# Fixed section order in the rendered document
SECTION_ORDER: Tuple[str, ...] = (
    "presentation",
    "objective",
    "experience",
    "education",
    "languages",
    "skills",
)


def validate_config(config: Any) -> bool:
    """
    Check that ``config`` can be rendered at all.

    True iff it is a mapping holding a ``personal`` mapping whose ``name``
    is a string with non-whitespace content. Nested sections are not
    checked. Never raises.
    """
    if not isinstance(config, Mapping):
        return False
    personal = config.get("personal")
    if not isinstance(personal, Mapping):
        return False
    name = personal.get("name")
    return isinstance(name, str) and bool(name.strip())


def _text(value: Any) -> str:
    """Coerce a loosely-typed JSON value to a trimmed string ("" for missing/non-text)."""
    if value is None or isinstance(value, (dict, list, bool)):
        return ""
    return str(value).strip()


def _strings(value: Any) -> Tuple[str, ...]:
    """Keep the non-blank strings of a JSON list, in order."""
    if not isinstance(value, list):
        return ()
    return tuple(s for s in (_text(v) for v in value) if s)


def _block_text(value: Any) -> str:
    """Read ``{"text": ...}`` blocks (presentation, objective)."""
    if isinstance(value, Mapping):
        return _text(value.get("text"))
    return ""


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop empty strings, lists and dicts."""
    return {k: v for k, v in data.items() if v not in ("", None, [], {}, ())}


@dataclass(frozen=True)
class ExperienceItem:
    """A single professional experience entry."""

    role: str
    date_from: str = ""
    date_to: str = ""
    country: str = ""
    company: str = ""
    bullets: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExperienceItem":
        return cls(
            role=_text(data.get("role")),
            date_from=_text(data.get("from")),
            date_to=_text(data.get("to")),
            country=_text(data.get("country")),
            company=_text(data.get("company")),
            bullets=_strings(data.get("bullets")),
        )

    @property
    def period(self) -> str:
        """'from - to', skipping missing ends."""
        return " - ".join(p for p in (self.date_from, self.date_to) if p)

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "from": self.date_from,
            "to": self.date_to,
            "country": self.country,
            "role": self.role,
            "company": self.company,
            "bullets": list(self.bullets),
        })


@dataclass(frozen=True)
class EducationItem:
    """A qualification with an optional institution."""

    title: str
    institution: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EducationItem":
        return cls(
            title=_text(data.get("title")),
            institution=_text(data.get("institution")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"title": self.title, "institution": self.institution})


@dataclass(frozen=True)
class LanguageItem:
    """A spoken language and its proficiency level."""

    language: str
    level: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LanguageItem":
        return cls(
            language=_text(data.get("language")),
            level=_text(data.get("level")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"language": self.language, "level": self.level})


@dataclass(frozen=True)
class Personal:
    """Personal details shown in the document header."""

    name: str
    nationality: str = ""
    sex: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    photo_path: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Personal":
        return cls(
            name=_text(data.get("name")),
            nationality=_text(data.get("nationality")),
            sex=_text(data.get("sex")),
            email=_text(data.get("email")),
            phone=_text(data.get("phone")),
            address=_text(data.get("address")),
            photo_path=_text(data.get("photoPath")),
        )

    def present_fields(self) -> List[Tuple[str, str]]:
        """(key, value) pairs of the non-blank optional fields, in panel order."""
        return [
            (key, getattr(self, key))
            for key in PERSONAL_FIELDS
            if getattr(self, key)
        ]

    def to_dict(self) -> Dict[str, Any]:
        data = {"photoPath": self.photo_path, "name": self.name}
        data.update({key: getattr(self, key) for key in PERSONAL_FIELDS})
        return _compact(data)


@dataclass(frozen=True)
class Sections:
    """Optional content blocks. Empty values mean the section is omitted."""

    presentation: str = ""
    objective: str = ""
    experience: Tuple[ExperienceItem, ...] = ()
    education: Tuple[EducationItem, ...] = ()
    languages: Tuple[LanguageItem, ...] = ()
    skills: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sections":
        return cls(
            presentation=_block_text(data.get("presentation")),
            objective=_block_text(data.get("objective")),
            experience=_items(data.get("experience"), ExperienceItem),
            education=_items(data.get("education"), EducationItem),
            languages=_items(data.get("languages"), LanguageItem),
            skills=_strings(data.get("skills")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "presentation": {"text": self.presentation} if self.presentation else {},
            "objective": {"text": self.objective} if self.objective else {},
            "experience": [e.to_dict() for e in self.experience],
            "education": [e.to_dict() for e in self.education],
            "languages": [lang.to_dict() for lang in self.languages],
            "skills": list(self.skills),
        })


def _items(value: Any, item_cls) -> tuple:
    """Build item dataclasses from a JSON list, skipping anything that is not an object."""
    if not isinstance(value, list):
        if value not in (None, "", [], {}):
            logger.debug(f"Ignoring non-list value for {item_cls.__name__}: {value!r}")
        return ()
    return tuple(item_cls.from_dict(v) for v in value if isinstance(v, Mapping))


@dataclass(frozen=True)
class CvConfig:
    """Root CV configuration (immutable)."""

    personal: Personal
    sections: Sections = field(default_factory=Sections)
    output_pdf: str = ""
    logo_path: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CvConfig":
        """
        Build a config from loosely-typed JSON data.

        The caller is expected to have run :func:`validate_config` first;
        malformed nested items are tolerated and dropped.
        """
        personal = data.get("personal")
        sections = data.get("sections")
        return cls(
            personal=Personal.from_dict(personal if isinstance(personal, Mapping) else {}),
            sections=Sections.from_dict(sections if isinstance(sections, Mapping) else {}),
            output_pdf=_text(data.get("outputPdf")),
            logo_path=_text(data.get("logoPath")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the JSON shape, omitting empty fields."""
        data: Dict[str, Any] = _compact({
            "outputPdf": self.output_pdf,
            "logoPath": self.logo_path,
        })
        data["personal"] = self.personal.to_dict()
        data["sections"] = self.sections.to_dict()
        return data


def build_config(
    name: str,
    sections: Optional[Dict[str, Any]] = None,
    **personal: str,
) -> CvConfig:
    """Shortcut for building a config in code: ``build_config("Ana", email="a@x.com")``."""
    return CvConfig.from_dict({
        "personal": {"name": name, **personal},
        "sections": sections or {},
    })
