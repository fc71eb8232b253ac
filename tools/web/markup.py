"""BeautifulSoup helpers shared by the search and fetch tools."""

import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, ParserRejectedMarkup

from .errors import ParseError

PARSER = "html.parser"

BINARY_CONTENT_TYPE_PREFIXES = ("image/", "audio/", "video/", "font/")
BINARY_CONTENT_TYPES = {
    "application/pdf",
    "application/octet-stream",
    "application/zip",
    "application/gzip",
    "application/x-gzip",
    "application/x-tar",
    "application/x-7z-compressed",
    "application/x-rar-compressed",
    "application/msword",
    "application/vnd.ms-excel",
    "application/wasm",
}


def is_binary(content_type: str) -> bool:
    """
    True for media types whose body is not text.

    Anything else (HTML, plain text, JSON, XML, scripts, a missing header)
    goes through the markup parser.
    """
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    if not mime:
        return False
    if mime.startswith(BINARY_CONTENT_TYPE_PREFIXES) and mime != "image/svg+xml":
        return True
    return mime in BINARY_CONTENT_TYPES or mime.startswith("application/vnd.openxmlformats")


def parse_markup(text: str, *, source: str = "") -> BeautifulSoup:
    """
    Parse HTML leniently.

    Raises:
        ParseError: if the parser rejects the document outright
    """
    try:
        with warnings.catch_warnings():
            # Short bodies that look like a URL or filename are still valid markup
            warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
            return BeautifulSoup(text, PARSER)
    except ParserRejectedMarkup as e:
        raise ParseError(f"Markup could not be parsed: {e}", url=source or None) from e


def element_text(element) -> str:
    """Visible text of an element with runs of whitespace collapsed."""
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())
