"""
CV generation orchestration.

Provides the main functions for:
- Building one CV (load → validate → render HTML → print PDF)
- Building several CVs, where one failure never stops the others
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import EXIT_BACKEND_ERROR, EXIT_CONFIG_ERROR, EXIT_SUCCESS, EuropassCVError
from .io import load_cv_config
from .model import CvConfig
from .pdf import PdfOptions, write_pdf
from .render import generate_html
from .settings import Settings

logger = logging.getLogger(__name__)


class CVGenerationResult:
    """Result of generating a single CV."""

    def __init__(
        self,
        name: str,
        success: bool,
        pdf_path: Optional[Path] = None,
        html_path: Optional[Path] = None,
        error: Optional[str] = None,
        exit_code: int = EXIT_SUCCESS,
    ):
        self.name = name
        self.success = success
        self.pdf_path = pdf_path
        self.html_path = html_path
        self.error = error
        self.exit_code = exit_code

    def __repr__(self) -> str:
        status = "✅" if self.success else "❌"
        return f"CVGenerationResult({status} {self.name})"


def _failed(name: str, error: EuropassCVError) -> CVGenerationResult:
    logger.error(f"❌ {name}: {error.message}")
    return CVGenerationResult(name, False, error=error.message, exit_code=error.exit_code)


def pdf_options_from_settings(settings: Settings) -> PdfOptions:
    return PdfOptions(
        format=settings.pdf.format,
        margin=settings.pdf.margin,
        timeout_ms=settings.pdf.timeout_ms,
    )


def resolve_output_path(
    config: CvConfig,
    output_path: Optional[Path],
    settings: Settings,
    file_stem: Optional[str] = None,
) -> Path:
    """
    Output precedence: explicit path > config ``outputPdf`` > settings default.

    With ``file_stem`` the settings default keeps its directory but is named
    after the config file, so batch builds do not overwrite each other.
    """
    if output_path is not None:
        return Path(output_path)
    if config.output_pdf:
        return Path(config.output_pdf)
    default = Path(settings.output.pdf)
    if file_stem:
        return default.with_name(f"{file_stem}.pdf")
    return default


def generate_cv(
    cv_file: Optional[Path] = None,
    *,
    config: Optional[CvConfig] = None,
    output_path: Optional[Path] = None,
    settings: Optional[Settings] = None,
    logo_path: Optional[str] = None,
    lang: Optional[str] = None,
    draft: Optional[bool] = None,
    html_only: bool = False,
    base_dir: Optional[Path] = None,
    name_by_file: bool = False,
) -> CVGenerationResult:
    """
    Generate one CV.

    Either ``cv_file`` or an already built ``config`` must be given. Errors
    are reported in the returned result, never raised.

    Args:
        cv_file: CV config JSON file.
        config: Config to use instead of loading ``cv_file``.
        output_path: PDF path; overrides ``outputPdf`` and settings.
        settings: Project settings (defaults if None).
        logo_path: Logo override; falls back to ``logoPath``, then settings.
        lang: "PT" or "EN"; falls back to settings.
        draft: Draft watermark; falls back to settings.
        html_only: Write the HTML next to the PDF path and skip the backend.
        base_dir: Directory relative image paths are resolved against.
        name_by_file: Name the default PDF after ``cv_file`` (batch builds).

    Returns:
        CVGenerationResult with status and paths.
    """
    if settings is None:
        settings = Settings()
    name = cv_file.stem if cv_file is not None else "cv"

    if config is None:
        if cv_file is None:
            raise ValueError("generate_cv needs either cv_file or config")
        try:
            config = load_cv_config(cv_file)
        except EuropassCVError as e:
            return _failed(name, e)
    if cv_file is None:
        name = config.personal.name

    logger.info(f"Processing CV: {name}")

    try:
        html = generate_html(
            config,
            logo_path=logo_path or config.logo_path or settings.render.logo_path,
            draft=settings.render.draft if draft is None else draft,
            lang=lang or settings.render.language,
            base_dir=base_dir,
        )
    except EuropassCVError as e:
        return _failed(name, e)

    file_stem = cv_file.stem if name_by_file and cv_file is not None else None
    target = resolve_output_path(config, output_path, settings, file_stem)

    if html_only:
        html_path = target.with_suffix(".html")
        try:
            html_path.parent.mkdir(parents=True, exist_ok=True)
            html_path.write_text(html, encoding="utf-8")
        except OSError as e:
            logger.error(f"❌ {name}: cannot write {html_path}: {e}")
            return CVGenerationResult(name, False, error=str(e), exit_code=EXIT_CONFIG_ERROR)
        logger.info(f"✅ HTML written: {html_path}")
        return CVGenerationResult(name, True, html_path=html_path)

    try:
        pdf_path = write_pdf(html, target, pdf_options_from_settings(settings))
    except EuropassCVError as e:
        return _failed(name, e)
    except Exception as e:
        logger.error(f"❌ {name}: PDF rendering failed: {e}")
        return CVGenerationResult(
            name, False,
            error=f"PDF rendering failed: {e}",
            exit_code=EXIT_BACKEND_ERROR,
        )

    logger.info(f"✅ PDF generated: {pdf_path}")
    return CVGenerationResult(name, True, pdf_path=pdf_path)


def generate_cvs(
    cv_files: Iterable[Path],
    *,
    settings: Optional[Settings] = None,
    logo_path: Optional[str] = None,
    lang: Optional[str] = None,
    draft: Optional[bool] = None,
    html_only: bool = False,
    base_dir: Optional[Path] = None,
) -> List[CVGenerationResult]:
    """
    Generate several CVs, each to its own ``outputPdf`` (or the settings default).

    A failing CV is reported in its result and the rest are still built.
    """
    results = [
        generate_cv(
            Path(cv_file),
            settings=settings,
            logo_path=logo_path,
            lang=lang,
            draft=draft,
            html_only=html_only,
            base_dir=base_dir,
            name_by_file=True,
        )
        for cv_file in cv_files
    ]

    successful = sum(1 for r in results if r.success)
    logger.info(f"Generated {successful}/{len(results)} CVs successfully")
    return results
