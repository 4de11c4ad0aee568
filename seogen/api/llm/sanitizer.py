"""User input sanitizing for prompts.

- Control characters are removed (newlines and tabs kept)
- Length is capped
- Common prompt-injection markers are logged, not removed

Usage:
    from seogen.api.llm.sanitizer import sanitize_user_input, UserInputSanitized

    clean = sanitize_user_input(form_value)
    instruction = UserInputSanitized(refinement_prompt).to_prompt()
"""

import logging
import re
from dataclasses import dataclass
from typing import ClassVar

logger = logging.getLogger(__name__)

CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

INJECTION_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"ignore\s+(all\s+)?previous\s+instructions?", re.I), "ignore_previous"),
    (
        re.compile(r"ignoriere\s+(alle\s+)?(vorherigen|bisherigen)\s+anweisungen", re.I),
        "ignore_previous_de",
    ),
    (re.compile(r"disregard\s+(all\s+)?above", re.I), "disregard_above"),
    (re.compile(r"^\s*system\s*:\s*", re.I | re.M), "system_role_marker"),
    (re.compile(r"\[INST\]|\[/INST\]", re.I), "instruction_marker"),
    (re.compile(r"<\|im_start\|>|<\|im_end\|>", re.I), "chatml_marker"),
    (re.compile(r"you\s+are\s+now\s+", re.I), "role_override"),
    (re.compile(r"du\s+bist\s+jetzt\s+", re.I), "role_override_de"),
]

DEFAULT_MAX_LENGTH = 100_000

USER_INPUT_START = "<<<USER_INPUT_START>>>"
USER_INPUT_END = "<<<USER_INPUT_END>>>"


def sanitize_user_input(
    text: str,
    max_length: int = DEFAULT_MAX_LENGTH,
    warn_on_injection: bool = True,
) -> str:
    """Sanitize one user-provided string.

    Args:
        text: Raw text
        max_length: Characters kept (the rest is cut)
        warn_on_injection: Log a warning when injection markers are found

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    result = CONTROL_CHARS_PATTERN.sub("", text)

    if len(result) > max_length:
        logger.warning(f"User input truncated: {len(result)} -> {max_length} chars")
        result = result[:max_length]

    if warn_on_injection:
        detected = [name for pattern, name in INJECTION_PATTERNS if pattern.search(result)]
        if detected:
            logger.warning(
                "Potential prompt injection detected",
                extra={
                    "patterns": detected,
                    "input_length": len(result),
                    "input_preview": result[:100] + "..." if len(result) > 100 else result,
                },
            )

    return result


@dataclass(frozen=True)
class UserInputSanitized:
    """Sanitized user text wrapped in boundary markers.

    Keeps free-text instructions visibly separated from our own prompt text.
    """

    _MAX_LENGTH: ClassVar[int] = DEFAULT_MAX_LENGTH

    content: str

    def __post_init__(self) -> None:
        # frozen dataclass
        object.__setattr__(
            self, "content", sanitize_user_input(self.content, max_length=self._MAX_LENGTH)
        )

    def to_prompt(self) -> str:
        return f"{USER_INPUT_START}\n{self.content}\n{USER_INPUT_END}"

    def __str__(self) -> str:
        return self.to_prompt()
