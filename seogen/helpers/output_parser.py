"""LLM output parser for generated content.

Recovers a JSON object from free-form model output through an ordered cascade
of extractors (first success wins):

1. whole_text: the entire text is JSON
2. fenced_block: first ```json (or bare ```) fenced block
3. brace_scan: balanced {...} substrings, largest first, that carry seoText/text
4. wrapper_key: object nested under "content"/"result"/"output"
5. html_fallback: bare HTML with an <h1> and more than 500 characters

Each extractor returns a candidate or None; nothing here raises on bad input.
"""

import json
import re
from collections.abc import Callable
from typing import Any

from seogen.helpers.schemas import ParseResult

_Candidate = tuple[dict[str, Any], list[str]]


class OutputParser:
    """Extraction cascade for model output."""

    TEXT_KEYS = ("seoText", "text")
    WRAPPER_KEYS = ("content", "result", "output")
    HTML_FALLBACK_MIN_CHARS = 500
    MAX_BRACE_CANDIDATES = 200

    # Regex patterns for code block extraction
    _JSON_BLOCK_PATTERN = re.compile(r"```json\s*\n?(.*?)```", re.DOTALL | re.IGNORECASE)
    _GENERIC_BLOCK_PATTERN = re.compile(r"```\s*\n(.*?)```", re.DOTALL)

    # Regex for trailing comma fix
    _TRAILING_COMMA_OBJ = re.compile(r",\s*}")
    _TRAILING_COMMA_ARR = re.compile(r",\s*]")

    _WRAPPER_KEY_PATTERN = re.compile(r'"(?:content|result|output)"\s*:\s*(\{)')
    _H1_BLOCK_PATTERN = re.compile(r"<h1[^>]*>.*?</h1>", re.IGNORECASE | re.DOTALL)

    def extract(self, content: str) -> ParseResult:
        """
        Run the extraction cascade.

        Args:
            content: Raw model output

        Returns:
            ParseResult: success with the recovered object, or failure
        """
        for name, extractor in self._extractors():
            candidate = extractor(content)
            if candidate is None:
                continue
            data, fixes = candidate
            return ParseResult(
                success=True,
                data=self._unwrap(data),
                raw=content,
                strategy=name,
                fixes_applied=fixes,
            )
        return ParseResult(success=False, raw=content)

    def extract_json_object(self, content: str) -> dict[str, Any] | None:
        """Recover any JSON object (no required keys) from model output.

        Used for non-content responses such as keyword analysis.
        """
        for extractor in (self._from_whole_text, self._from_fenced_block):
            candidate = extractor(content)
            if candidate is not None:
                return candidate[0]
        for start, end in self._balanced_spans(content)[: self.MAX_BRACE_CANDIDATES]:
            data, _ = self._loads(content[start : end + 1])
            if isinstance(data, dict):
                return data
        return None

    def _extractors(self) -> list[tuple[str, Callable[[str], _Candidate | None]]]:
        return [
            ("whole_text", self._from_whole_text),
            ("fenced_block", self._from_fenced_block),
            ("brace_scan", self._from_brace_scan),
            ("wrapper_key", self._from_wrapper_key),
            ("html_fallback", self._from_html),
        ]

    # ------------------------------------------------------------------
    # Extractors
    # ------------------------------------------------------------------

    def _from_whole_text(self, content: str) -> _Candidate | None:
        data, fixes = self._loads(content.strip())
        if isinstance(data, dict):
            return data, fixes
        return None

    def _from_fenced_block(self, content: str) -> _Candidate | None:
        match = self._JSON_BLOCK_PATTERN.search(content) or self._GENERIC_BLOCK_PATTERN.search(
            content
        )
        if not match:
            return None
        data, fixes = self._loads(match.group(1).strip())
        if isinstance(data, dict):
            return data, ["code_block_removed", *fixes]
        return None

    def _from_brace_scan(self, content: str) -> _Candidate | None:
        spans = sorted(self._balanced_spans(content), key=lambda s: s[1] - s[0], reverse=True)
        for start, end in spans[: self.MAX_BRACE_CANDIDATES]:
            data, fixes = self._loads(content[start : end + 1])
            if isinstance(data, dict) and self._has_text_key(data):
                return data, ["brace_scan", *fixes]
        return None

    def _from_wrapper_key(self, content: str) -> _Candidate | None:
        spans = dict(self._balanced_spans(content))
        for match in self._WRAPPER_KEY_PATTERN.finditer(content):
            start = match.start(1)
            end = spans.get(start)
            if end is None:
                continue
            data, fixes = self._loads(content[start : end + 1])
            if isinstance(data, dict):
                return data, ["wrapper_key", *fixes]
        return None

    def _from_html(self, content: str) -> _Candidate | None:
        if len(content) <= self.HTML_FALLBACK_MIN_CHARS:
            return None
        if not self._H1_BLOCK_PATTERN.search(content):
            return None
        return {"seoText": content.strip()}, ["html_wrapped"]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _has_text_key(self, data: dict[str, Any]) -> bool:
        return any(key in data for key in self.TEXT_KEYS)

    def _unwrap(self, data: dict[str, Any]) -> dict[str, Any]:
        """Descend into a wrapper key when the object itself carries no text."""
        if self._has_text_key(data):
            return data
        for key in self.WRAPPER_KEYS:
            nested = data.get(key)
            if isinstance(nested, str):
                nested, _ = self._loads(nested.strip())
            if isinstance(nested, dict):
                return nested
        return data

    def _loads(self, text: str) -> tuple[Any, list[str]]:
        """json.loads with the deterministic trailing-comma fix. (None, []) on failure."""
        if not text:
            return None, []
        try:
            return json.loads(text), []
        except (ValueError, RecursionError):
            pass

        fixed, fixes = self.apply_deterministic_fixes(text)
        if fixed is None:
            return None, []
        try:
            return json.loads(fixed), fixes
        except (ValueError, RecursionError):
            return None, []

    def apply_deterministic_fixes(self, content: str) -> tuple[str | None, list[str]]:
        """
        Apply deterministic fixes.

        Allowed fixes:
        - Trailing comma removal: ,} -> }, ,] -> ]

        Returns:
            tuple[str | None, list[str]]: (fixed string or None, list of applied fix names)
        """
        fixed = content
        changed = False

        if self._TRAILING_COMMA_OBJ.search(fixed):
            fixed = self._TRAILING_COMMA_OBJ.sub("}", fixed)
            changed = True
        if self._TRAILING_COMMA_ARR.search(fixed):
            fixed = self._TRAILING_COMMA_ARR.sub("]", fixed)
            changed = True

        if changed:
            return fixed, ["trailing_comma_removed"]
        return None, []

    def _balanced_spans(self, content: str) -> list[tuple[int, int]]:
        """
        Find every balanced {...} span in one pass.

        Quotes only toggle string state inside an open brace, so narration
        around the JSON cannot desynchronize the scan.

        Returns:
            list[tuple[int, int]]: (start, end) index pairs, end inclusive
        """
        spans: list[tuple[int, int]] = []
        stack: list[int] = []
        in_string = False
        escaped = False

        for index, char in enumerate(content):
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"' and stack:
                in_string = True
            elif char == "{":
                stack.append(index)
            elif char == "}" and stack:
                spans.append((stack.pop(), index))
        return spans
