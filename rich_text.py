import html
import math
import re

import markdown
from markdown import util
from markdown.treeprocessors import Treeprocessor
from markupsafe import Markup

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists", "toc"]
SAFE_SCHEMES = ("http", "https", "mailto")
# Browsers ignore these anywhere inside a URL scheme
_IGNORED_URL_CHARS = re.compile(r"[\x00-\x20\x7f]+")
_ESCAPED_CHAR = re.compile(f"{util.STX}([0-9]+){util.ETX}")


def is_safe_url(value):
    """True for relative URLs, anchors and http(s)/mailto links."""
    url = _IGNORED_URL_CHARS.sub("", html.unescape(value)).lower()
    scheme, colon, _ = url.partition(":")
    if not colon or any(char in scheme for char in "/?#"):
        return True
    return scheme in SAFE_SCHEMES


class _StripUnsafeLinks(Treeprocessor):
    def run(self, root):
        for element in root.iter():
            for attribute in ("href", "src"):
                value = element.get(attribute)
                if not value:
                    continue
                # Backslash-escaped characters may still be stashed placeholders
                value = _ESCAPED_CHAR.sub(lambda m: chr(int(m.group(1))), value)
                if not is_safe_url(value):
                    element.set(attribute, "#")


def _markdown():
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)
    # Raw HTML in the source is rendered as escaped text
    md.preprocessors.deregister("html_block")
    md.inlinePatterns.deregister("html")
    md.treeprocessors.register(_StripUnsafeLinks(md), "strip_unsafe_links", -1)
    return md


def render_markdown(text):
    """Render Markdown source to HTML that is safe to embed in a template."""
    if not text:
        return Markup("")
    return Markup(_markdown().convert(text))


def plain_text(text, limit=160):
    """Markdown source reduced to a single line of plain text."""
    stripped = render_markdown(text).striptags()
    stripped = re.sub(r"\s+", " ", stripped).strip()
    if limit and len(stripped) > limit:
        cut = stripped[:limit].rsplit(" ", 1)[0]
        return cut.rstrip(" .,;:") + "…"
    return stripped


def reading_time(text, wpm=200):
    words = len(plain_text(text, limit=None).split())
    return max(1, math.ceil(words / wpm))
