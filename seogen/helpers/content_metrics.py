"""Content metrics calculation for generated HTML.

Provides structure counts for the ``seoText`` HTML:
- Plain-text word count (tags stripped, whitespace collapsed)
- Heading, list and <strong> counts
- Paragraph statistics
- Focus keyword occurrences and density
"""

import html
import re

from seogen.helpers.schemas import HtmlMetrics

# Tag stripping
TAG_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")

# HTML structure patterns (opening tags only)
H1_PATTERN = re.compile(r"<h1[\s>]", re.IGNORECASE)
H2_PATTERN = re.compile(r"<h2[\s>]", re.IGNORECASE)
H3_PATTERN = re.compile(r"<h3[\s>]", re.IGNORECASE)
LIST_PATTERN = re.compile(r"<(?:ul|ol)[\s>]", re.IGNORECASE)
STRONG_PATTERN = re.compile(r"<strong[\s>]", re.IGNORECASE)
PARAGRAPH_PATTERN = re.compile(r"<p[\s>](.*?)</p>", re.IGNORECASE | re.DOTALL)
H1_TEXT_PATTERN = re.compile(r"<h1[^>]*>(.*?)</h1>", re.IGNORECASE | re.DOTALL)


def strip_html(markup: str) -> str:
    """Remove tags, decode entities and collapse whitespace."""
    text = TAG_PATTERN.sub(" ", markup)
    text = html.unescape(text)
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def count_words(text: str) -> int:
    """Count space-separated words in plain text."""
    stripped = text.strip()
    if not stripped:
        return 0
    return len(stripped.split(" "))


def first_h1_text(markup: str) -> str | None:
    """Text content of the first <h1>, if any."""
    match = H1_TEXT_PATTERN.search(markup)
    if not match:
        return None
    text = strip_html(match.group(1))
    return text or None


class ContentMetrics:
    """Metrics calculator for generated HTML."""

    def html_metrics(
        self,
        markup: str,
        faq_count: int = 0,
        focus_keyword: str = "",
        title: str = "",
        meta_description: str = "",
    ) -> HtmlMetrics:
        """
        Calculate structure metrics for an HTML document.

        Args:
            markup: Generated seoText HTML
            faq_count: Number of FAQ entries delivered alongside the text
            focus_keyword: Keyword whose occurrences/density are reported
            title: Title tag (length only)
            meta_description: Meta description (length only)

        Returns:
            HtmlMetrics
        """
        plain = strip_html(markup)
        word_count = count_words(plain)

        paragraphs = [strip_html(p) for p in PARAGRAPH_PATTERN.findall(markup)]
        paragraphs = [p for p in paragraphs if p]
        paragraph_words = [count_words(p) for p in paragraphs]
        avg_paragraph_words = (
            round(sum(paragraph_words) / len(paragraph_words), 1) if paragraph_words else 0.0
        )

        keyword_count = self.keyword_count(plain, focus_keyword)
        keyword_density = round(keyword_count / word_count * 100, 2) if word_count else 0.0

        return HtmlMetrics(
            word_count=word_count,
            h1_count=len(H1_PATTERN.findall(markup)),
            h2_count=len(H2_PATTERN.findall(markup)),
            h3_count=len(H3_PATTERN.findall(markup)),
            list_count=len(LIST_PATTERN.findall(markup)),
            strong_count=len(STRONG_PATTERN.findall(markup)),
            faq_count=faq_count,
            paragraph_count=len(paragraphs),
            avg_paragraph_words=avg_paragraph_words,
            keyword_count=keyword_count,
            keyword_density=keyword_density,
            title_length=len(title),
            meta_description_length=len(meta_description),
        )

    def keyword_count(self, text: str, keyword: str) -> int:
        """Case-insensitive, non-overlapping occurrences of ``keyword``."""
        keyword = keyword.strip()
        if not keyword:
            return 0
        return len(re.findall(re.escape(keyword), text, flags=re.IGNORECASE))
