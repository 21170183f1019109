"""
Tests for europass_cv.render module.

Tests section composition, the personal panel, images, the draft watermark
and escaping of user text in the assembled document.
"""

import re

import pytest

from europass_cv.dictionary import EN, PT
from europass_cv.model import CvConfig, build_config
from europass_cv.render import (
    compose_sections,
    generate_html,
    personal_columns,
    section_data,
)


def section_keys(html: str) -> list:
    """Return the data-section keys of a document, in order."""
    return re.findall(r'data-section="([a-z]+)"', html)


def list_items(html: str) -> list:
    return re.findall(r'<li class="cv-list__item">(.*?)</li>', html)


class TestMinimalDocument:
    """The minimal config: a name, an email and two skills."""

    @pytest.fixture
    def html(self, minimal_cv_data):
        return generate_html(minimal_cv_data)

    def test_heading_is_the_name(self, html):
        assert '<h1 class="cv-header__name">Ana Silva</h1>' in html

    def test_email_row(self, html):
        assert '<span class="cv-personal__label">Email:</span>' in html
        assert '<span class="cv-personal__value">a@x.com</span>' in html

    def test_only_skills_section(self, html):
        assert section_keys(html) == ["skills"]
        assert list_items(html) == ["Go", "SQL"]
        assert "HABILIDADES" in html

    def test_document_is_self_contained(self, html):
        assert html.lstrip().startswith("<!DOCTYPE html>")
        assert "<style>" in html
        assert "<link" not in html
        assert "<script" not in html
        assert 'lang="pt"' in html

    def test_no_watermark_by_default(self, html):
        assert 'class="cv-watermark"' not in html
        assert "RASCUNHO" not in html

    def test_no_photo(self, html):
        assert 'class="cv-header__photo"' not in html


class TestSections:
    """Tests for section selection and order."""

    def test_name_only_has_header_and_no_sections(self):
        html = generate_html({"personal": {"name": "Ana"}})
        assert section_keys(html) == []
        assert 'class="cv-personal"' not in html
        assert '<h1 class="cv-header__name">Ana</h1>' in html

    def test_fixed_order_regardless_of_key_order(self, complete_cv_data):
        html = generate_html(complete_cv_data)
        assert section_keys(html) == [
            "presentation", "objective", "experience", "education", "languages", "skills",
        ]

    def test_empty_sections_are_omitted(self):
        html = generate_html({
            "personal": {"name": "Ana"},
            "sections": {
                "presentation": {"text": "  "},
                "objective": {},
                "experience": [],
                "languages": [{"language": "Inglês"}],
                "skills": ["Go"],
            },
        })
        assert section_keys(html) == ["skills"]

    def test_items_without_required_fields_are_dropped(self):
        config = CvConfig.from_dict({
            "personal": {"name": "Ana"},
            "sections": {
                "experience": [{"company": "Nobody"}, {"role": "Dev"}],
                "education": [{"institution": "Somewhere"}],
            },
        })
        assert [e.role for e in section_data(config.sections, "experience")] == ["Dev"]
        assert section_data(config.sections, "education") == ()
        assert [f.key for f in compose_sections(config, PT)] == ["experience"]

    def test_unknown_section_key(self):
        with pytest.raises(KeyError):
            section_data(CvConfig.from_dict({"personal": {"name": "Ana"}}).sections, "hobbies")

    def test_experience_layout(self, complete_cv_data):
        html = generate_html(complete_cv_data)
        assert '<div class="cv-entry__period">2019 - Atual - Portugal</div>' in html
        assert '<div class="cv-entry__period">2016 - 2019</div>' in html
        assert "BACKEND DEVELOPER – " in html
        assert "<li class=\"cv-list__item\">Reduced latency by 40%</li>" in html

    def test_education_and_languages(self, complete_cv_data):
        html = generate_html(complete_cv_data)
        assert "LICENCIATURA EM ENGENHARIA INFORMÁTICA" in html
        assert '<div class="cv-entry__institution">Universidade do Porto</div>' in html
        assert (
            '<span class="cv-language__name">Inglês</span>: '
            '<span class="cv-language__level">C1</span>'
        ) in html


class TestEscaping:
    """User text never becomes markup."""

    def test_company_and_skill_are_escaped(self, complete_cv_data):
        html = generate_html(complete_cv_data)
        assert "Acme &lt;Labs&gt;" in html
        assert "Acme <Labs>" not in html
        assert "Docker &amp; Kubernetes" in html

    def test_presentation_newlines_and_quotes(self, complete_cv_data):
        html = generate_html(complete_cv_data)
        assert "experience.<br>Likes &#34;clean&#34; code." in html

    def test_script_in_name(self):
        html = generate_html({"personal": {"name": "<script>alert(1)</script>"}})
        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html

    def test_markup_in_presentation_is_not_rendered(self):
        html = generate_html({
            "personal": {"name": "Ana"},
            "sections": {"presentation": {"text": "<b>bold</b>\nnext"}},
        })
        assert "&lt;b&gt;bold&lt;/b&gt;<br>next" in html


class TestDraftWatermark:
    """Tests for the draft overlay."""

    def test_portuguese_watermark(self, minimal_cv_data):
        html = generate_html(minimal_cv_data, draft=True)
        chars = re.findall(r'<span class="cv-watermark__char">(.)</span>', html)
        assert "".join(chars) == "RASCUNHO"
        assert 'aria-hidden="true"' in html

    def test_english_watermark(self, minimal_cv_data):
        html = generate_html(minimal_cv_data, draft=True, lang="EN")
        chars = re.findall(r'<span class="cv-watermark__char">(.)</span>', html)
        assert "".join(chars) == "DRAFT"

    def test_draft_does_not_change_content(self, complete_cv_data):
        plain = generate_html(complete_cv_data)
        draft = generate_html(complete_cv_data, draft=True)
        assert section_keys(plain) == section_keys(draft)
        start = draft.index('<div class="cv-watermark"')
        end = draft.index("</div>", start) + len("</div>")
        assert re.sub(r"\s+", "", draft[:start] + draft[end:]) == re.sub(r"\s+", "", plain)


class TestLocale:
    """Tests for localized labels."""

    def test_english_labels(self, complete_cv_data):
        html = generate_html(complete_cv_data, lang="EN")
        assert 'lang="en"' in html
        assert "PROFESSIONAL EXPERIENCE" in html
        assert "Gender:" in html
        assert "Phone:" in html
        assert "Experiência Profissional".upper() not in html

    def test_unknown_language_falls_back_to_portuguese(self, complete_cv_data):
        html = generate_html(complete_cv_data, lang="FR")
        assert "EXPERIÊNCIA PROFISSIONAL" in html
        assert "Telemóvel:" in html

    def test_same_input_same_output(self, complete_cv_data):
        assert generate_html(complete_cv_data, lang="EN") == generate_html(complete_cv_data, lang="EN")


class TestPersonalColumns:
    """Tests for the two-column personal panel."""

    def test_no_optional_fields_means_no_panel(self):
        assert personal_columns(build_config("Ana").personal, PT) == []

    def test_static_split(self, complete_cv_data):
        personal = CvConfig.from_dict(complete_cv_data).personal
        left, right = personal_columns(personal, PT)
        assert [label for label, _ in left] == ["Nacionalidade", "Email", "Morada"]
        assert [label for label, _ in right] == ["Sexo", "Telemóvel"]

    def test_fields_keep_their_column(self):
        left, right = personal_columns(build_config("Ana", phone="123").personal, EN)
        assert left == []
        assert right == [("Phone", "123")]

    def test_every_present_field_is_shown_once(self, complete_cv_data):
        html = generate_html(complete_cv_data)
        for value in ("Portuguesa", "Masculino", "joao@example.com", "+351 912 345 678"):
            assert html.count(f'<span class="cv-personal__value">{value}</span>') == 1


class TestImages:
    """Tests for photo and logo embedding."""

    def test_logo_placeholder_without_logo(self, minimal_cv_data):
        html = generate_html(minimal_cv_data)
        assert 'class="cv-logo cv-logo--placeholder"' in html
        assert "europass" in html

    def test_logo_embedded(self, minimal_cv_data, png_file):
        html = generate_html(minimal_cv_data, logo_path=str(png_file))
        assert 'class="cv-logo__image" src="data:image/png;base64,' in html
        assert 'class="cv-logo cv-logo--placeholder"' not in html

    def test_missing_logo_falls_back_to_placeholder(self, minimal_cv_data, tmp_path):
        html = generate_html(minimal_cv_data, logo_path=str(tmp_path / "missing.png"))
        assert 'class="cv-logo cv-logo--placeholder"' in html

    def test_photo_from_config_relative_to_base_dir(self, jpeg_file, tmp_path):
        config = {"personal": {"name": "Ana", "photoPath": "photo.jpg"}}
        html = generate_html(config, base_dir=tmp_path)
        assert 'class="cv-header__photo" src="data:image/jpeg;base64,' in html

    def test_unresolvable_photo_path_is_omitted(self):
        config = {"personal": {"name": "Ana", "photoPath": "~no_such_user_europass_cv/p.jpg"}}
        html = generate_html(config, logo_path="~no_such_user_europass_cv/logo.png")
        assert 'class="cv-header__photo"' not in html
        assert 'class="cv-logo cv-logo--placeholder"' in html
        assert '<h1 class="cv-header__name">Ana</h1>' in html

    def test_missing_photo_is_omitted(self, tmp_path):
        config = {"personal": {"name": "Ana", "photoPath": "nope.jpg"}}
        html = generate_html(config, base_dir=tmp_path)
        assert 'class="cv-header__photo"' not in html
        assert '<h1 class="cv-header__name">Ana</h1>' in html

    def test_photo_override(self, jpeg_file, tmp_path):
        config = {"personal": {"name": "Ana", "photoPath": "nope.jpg"}}
        html = generate_html(config, photo_path=str(jpeg_file))
        assert 'class="cv-header__photo"' in html

    def test_no_file_references(self, complete_cv_data, png_file):
        html = generate_html(complete_cv_data, logo_path=str(png_file))
        assert not re.search(r'src="(?!data:)', html)
