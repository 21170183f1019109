"""
Localized labels for the rendered CV.

Two label sets are supported: Portuguese (the base locale) and English.
"""

from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_LANGUAGE = "PT"
SUPPORTED_LANGUAGES = ("PT", "EN")


@dataclass(frozen=True)
class Dictionary:
    """Label strings for one locale."""

    draft: str
    nationality: str
    sex: str
    email: str
    phone: str
    address: str
    presentation: str
    objective: str
    experience: str
    education: str
    languages: str
    skills: str

    def label(self, key: str) -> str:
        return getattr(self, key)


PT = Dictionary(
    draft="RASCUNHO",
    nationality="Nacionalidade",
    sex="Sexo",
    email="Email",
    phone="Telemóvel",
    address="Morada",
    presentation="Apresentação",
    objective="Objetivo Profissional",
    experience="Experiência Profissional",
    education="Educação e Formação",
    languages="Competências Linguísticas",
    skills="Habilidades",
)

EN = Dictionary(
    draft="DRAFT",
    nationality="Nationality",
    sex="Gender",
    email="Email",
    phone="Phone",
    address="Address",
    presentation="Presentation",
    objective="Professional Objective",
    experience="Professional Experience",
    education="Education and Training",
    languages="Linguistic Skills",
    skills="Skills",
)

_DICTIONARIES: Dict[str, Dictionary] = {"PT": PT, "EN": EN}


def normalize_language(lang: Optional[str]) -> str:
    """Return "EN" for any casing of "en", otherwise the base locale code."""
    if isinstance(lang, str) and lang.strip().upper() == "EN":
        return "EN"
    return DEFAULT_LANGUAGE


def get_dictionary(lang: Optional[str] = DEFAULT_LANGUAGE) -> Dictionary:
    """
    Get the label set for a language code.

    "EN" (any case) selects English; everything else, including None and
    unknown codes, falls back to Portuguese.
    """
    return _DICTIONARIES[normalize_language(lang)]
