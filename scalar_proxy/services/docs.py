"""Scalar docs page rendering."""

from pathlib import Path

from scalar_proxy.core.debug import debug
from scalar_proxy.core.exceptions import StoreValuesMissingError, TemplateNotFoundError

DEFAULT_TEMPLATE = Path(__file__).resolve().parent.parent / "templates" / "api-docs.html"

PROXY_URL_TOKEN = "&{proxy_url}"
API_SPEC_URL_TOKEN = "&{api_spec_url}"


class DocsRenderer:
    """Load the HTML template and substitute the proxy and API spec URLs."""

    def __init__(
        self,
        proxy_url: str | None,
        api_spec_url: str | None,
        custom_html_path: str | Path | None = None,
    ) -> None:
        self._proxy_url = proxy_url
        self._api_spec_url = api_spec_url
        self._template_path = Path(custom_html_path) if custom_html_path else DEFAULT_TEMPLATE

    def render(self) -> str:
        """Return the rendered page.

        Raises:
            StoreValuesMissingError: proxy URL or API spec URL is unset.
            TemplateNotFoundError: the template file does not exist.
        """
        if not self._proxy_url or not self._api_spec_url:
            raise StoreValuesMissingError("Proxy URL or API Spec URL not defined")

        if not self._template_path.is_file():
            raise TemplateNotFoundError(
                f"HTML template file not found at path: {self._template_path}"
            )

        html = self._template_path.read_text(encoding="utf-8")
        debug("HTML template read, length:", len(html))
        return html.replace(PROXY_URL_TOKEN, self._proxy_url).replace(
            API_SPEC_URL_TOKEN, self._api_spec_url
        )
