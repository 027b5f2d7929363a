"""Render quotes and invoices to standalone HTML.

The rendered HTML embeds its stylesheet so it can be rasterized without
any files next to it.
"""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError

from schemas.document import BusinessDocument, CompanyProfile

from ..exceptions import DocumentRenderError
from .filters import FILTERS

logger = logging.getLogger(__name__)

# Resolve the project root (4 levels up from this file):
#   renderer.py → documents/ → paged_export/ → src/ → project root
# If this file is ever moved, the chain of .parent calls must be updated.
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent
TEMPLATES_DIR = PACKAGE_ROOT / "resources" / "templates"
STYLESHEETS_DIR = PACKAGE_ROOT / "resources" / "stylesheets"

TEMPLATE_NAMES = {
    "quote": "quote.html.j2",
    "invoice": "invoice.html.j2",
}


class DocumentRenderer:
    """Render business documents through Jinja2 templates.

    Attributes:
        company: Issuing company shown in every document header
        stylesheet_name: Name of the CSS stylesheet embedded in the output
    """

    def __init__(
        self,
        company: CompanyProfile | None = None,
        stylesheet_name: str = "document.css",
        templates_dir: Path | None = None,
        stylesheets_dir: Path | None = None,
    ):
        """Initialize the document renderer.

        Args:
            company: Issuing company (default: CompanyProfile())
            stylesheet_name: Name of the CSS stylesheet file
            templates_dir: Directory containing templates (default: resources/templates)
            stylesheets_dir: Directory containing stylesheets (default: resources/stylesheets)
        """
        self.company = company or CompanyProfile()
        self.stylesheet_name = stylesheet_name
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.stylesheets_dir = stylesheets_dir or STYLESHEETS_DIR

        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
        )
        for name, func in FILTERS.items():
            self._env.filters[name] = func

    def _load_stylesheet(self) -> str:
        path = self.stylesheets_dir / self.stylesheet_name
        if path.exists():
            return path.read_text()
        logger.warning(f"Stylesheet {self.stylesheet_name} not found")
        return ""

    def render(self, document: BusinessDocument) -> str:
        """Render *document* to HTML.

        Raises:
            DocumentRenderError: If the document kind has no template or
                the template fails to render
        """
        kind = getattr(document, "kind", None)
        template_name = TEMPLATE_NAMES.get(kind)
        if template_name is None:
            raise DocumentRenderError(f"No template for document kind {kind!r}")

        try:
            template = self._env.get_template(template_name)
            html = template.render(
                document=document,
                company=self.company,
                stylesheet=self._load_stylesheet(),
            )
        except TemplateError as e:
            raise DocumentRenderError(
                f"Failed to render {template_name}: {e}", template_name=template_name
            ) from e

        logger.debug(f"Rendered {kind} {document.number or 'DRAFT'} ({len(html)} bytes)")
        return html
