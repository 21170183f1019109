"""
PDF backend for Europass CV.

Prints the rendered HTML to PDF with headless Chromium (Playwright).
Each call launches its own browser and always closes it, so concurrent
callers never share a browser session.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from .errors import ConfigurationError, RenderBackendError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PdfOptions:
    """Page setup for the printed CV."""

    format: str = "A4"
    margin: str = "10mm"
    print_background: bool = True
    timeout_ms: int = 30000

    def margins(self):
        return {side: self.margin for side in ("top", "right", "bottom", "left")}


def html_to_pdf(html: str, options: Optional[PdfOptions] = None) -> bytes:
    """
    Convert an HTML document to PDF bytes.

    Raises:
        RenderBackendError: If the browser cannot be launched or printing fails.
    """
    if options is None:
        options = PdfOptions()

    logger.debug(f"Launching headless Chromium ({options.format}, margin {options.margin})")
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            try:
                page = browser.new_page()
                page.set_content(html, wait_until="load", timeout=options.timeout_ms)
                return page.pdf(
                    format=options.format,
                    margin=options.margins(),
                    print_background=options.print_background,
                )
            finally:
                browser.close()
    except PlaywrightError as e:
        raise RenderBackendError(f"PDF rendering failed: {e}") from e


def write_pdf(
    html: str,
    output_path: Union[str, Path],
    options: Optional[PdfOptions] = None,
) -> Path:
    """
    Render ``html`` to a PDF file.

    Raises:
        RenderBackendError: If PDF rendering fails.
        ConfigurationError: If the output file cannot be written.
    """
    output_path = Path(output_path)
    pdf_bytes = html_to_pdf(html, options)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(pdf_bytes)
    except OSError as e:
        raise ConfigurationError(f"Cannot write PDF {output_path}: {e}")
    logger.info(f"PDF saved to {output_path}")
    return output_path
