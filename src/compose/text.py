"""
HTML to status text conversion.

Mastodon statuses are plain text, so post HTML is reduced to readable text
before syndication. Anchors only keep their visible text during rendering,
which would silently drop a link like <a href="...">click here</a>; links
that are missing from the rendered text are therefore appended afterwards.

Usage:
    >>> html_to_status_text('<p>Hello <a href="https://example.com/x">world</a></p>')
    'Hello world\\n\\nhttps://example.com/x'
"""
import logging
import re
from html.parser import HTMLParser
from typing import List, Optional, Tuple

from compose.links import extract_external_links


logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s+")


class StatusTextExtractor(HTMLParser):
    """HTML parser rendering a fragment as plain text.

    Block elements are separated by a blank line, list items by a single
    newline. Anchor hrefs and images are ignored, as is the content of
    script and style elements. Lines are never wrapped.
    """

    BLOCK_TAGS = {
        "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt",
        "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5", "h6",
        "header", "hr", "main", "nav", "ol", "p", "pre", "section", "table",
        "tr", "ul",
    }
    LIST_TAGS = {"ol", "ul"}
    SKIP_TAGS = {"head", "script", "style", "template"}
    LIST_ITEM_PREFIX = "* "

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.blocks: List[Tuple[str, bool]] = []  # (text, is_list_item)
        self._parts: List[str] = []
        self._list_depth = 0
        self._prefix_pending = False
        self._skip_depth = 0
        self._pre_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in self.SKIP_TAGS:
            self._skip_depth += 1
        elif tag == "br":
            self._parts.append("\n")
        elif tag == "li":
            self._flush()
            self._prefix_pending = True
        elif tag in self.BLOCK_TAGS:
            self._flush()
            if tag == "pre":
                self._pre_depth += 1
            elif tag in self.LIST_TAGS:
                self._list_depth += 1

    def handle_startendtag(self, tag, attrs):
        # <br/> and <hr/> must not open a skip or pre section
        if tag == "br":
            self._parts.append("\n")
        elif tag in self.BLOCK_TAGS:
            self._flush()

    def handle_endtag(self, tag):
        if tag in self.SKIP_TAGS:
            self._skip_depth = max(0, self._skip_depth - 1)
        elif tag == "li":
            self._flush()
            self._prefix_pending = False
        elif tag in self.BLOCK_TAGS:
            self._flush()
            if tag == "pre":
                self._pre_depth = max(0, self._pre_depth - 1)
            elif tag in self.LIST_TAGS:
                self._list_depth = max(0, self._list_depth - 1)
                self._prefix_pending = False

    def handle_data(self, data):
        if self._skip_depth:
            return
        if self._pre_depth:
            self._parts.append(data)
        else:
            self._parts.append(WHITESPACE_PATTERN.sub(" ", data))

    def _flush(self) -> None:
        text = "".join(self._parts)
        if self._pre_depth:
            text = text.strip("\n")
        else:
            lines = [line.strip() for line in text.split("\n")]
            text = "\n".join(lines).strip("\n")

        self._parts = []
        if not text:
            return

        # Paragraphs inside a list item belong to it; only the first is prefixed
        if self._prefix_pending:
            text = self.LIST_ITEM_PREFIX + text
            self._prefix_pending = False
        self.blocks.append((text, self._list_depth > 0))

    def get_text(self) -> str:
        """Return the rendered text of everything fed so far."""
        self._flush()

        rendered = []
        previous_list_item = False
        for i, (text, list_item) in enumerate(self.blocks):
            if i > 0:
                rendered.append("\n" if list_item and previous_list_item else "\n\n")
            rendered.append(text)
            previous_list_item = list_item

        return "".join(rendered)


def html_to_text(html: str) -> str:
    """Render an HTML fragment as plain text without link targets or images."""
    parser = StatusTextExtractor()
    parser.feed(html)
    parser.close()
    return parser.get_text()


def html_to_status_text(html: str, server_url: Optional[str] = None) -> str:
    """Convert HTML to status text, appending external links not visible in it.

    Args:
        html: Post HTML
        server_url: Mastodon server URL; links to this host are not appended

    Returns:
        Plain text, followed by a blank line and one missing link per line
        when any external link would otherwise be lost
    """
    urls = extract_external_links(html, server_url)
    text = html_to_text(html)

    missing_urls = [url for url in urls if url not in text]
    if not missing_urls:
        return text

    logger.debug(f"Appending {len(missing_urls)} link(s) missing from rendered text")
    links = "\n".join(missing_urls)
    if not text:
        return links
    return f"{text}\n\n{links}"
