"""Briefing aggregation.

Downloads the uploaded briefing files concurrently, concatenates them with
per-file headers and compresses the result with one summarization call.
Storage failures skip the file; they never fail the request.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from seogen.api.core.errors import UpstreamGatewayError
from seogen.api.llm import AIGatewayClient, LLMError, LLMMessage, ModelConfig
from seogen.api.storage import BriefingStore, BriefingStoreError

logger = logging.getLogger(__name__)

MAX_FILE_CHARS = 10_000

SUMMARY_SYSTEM_PROMPT = (
    "Du bist ein Experte für die Analyse von Briefing-Dokumenten. "
    "Fasse die wichtigsten Informationen strukturiert zusammen."
)

SUMMARY_USER_TEMPLATE = """Analysiere die folgenden Briefing-Dokumente und extrahiere:
- Produktinformationen und technische Daten
- Zielgruppe und Positionierung
- USPs und Kernbotschaften
- Vorgaben zu Tonalität, Begriffen und Compliance

{content}"""


@dataclass(frozen=True)
class BriefingDocument:
    path: str
    text: str

    def render(self) -> str:
        return f"=== Datei: {self.path} ===\n{self.text}"


class BriefingAggregator:
    """Builds the briefing context for fresh generation."""

    def __init__(self, store: BriefingStore, gateway: AIGatewayClient):
        self.store = store
        self.gateway = gateway

    async def fetch(self, paths: Sequence[str]) -> list[BriefingDocument]:
        """Download every path concurrently; failed downloads are skipped."""
        results = await asyncio.gather(
            *(self.store.download_text(path) for path in paths),
            return_exceptions=True,
        )
        documents: list[BriefingDocument] = []
        for path, result in zip(paths, results):
            if isinstance(result, BriefingStoreError):
                logger.warning(f"Skipping briefing file {path}: {result}")
                continue
            if isinstance(result, Exception):
                logger.warning(
                    f"Skipping briefing file {path} after unexpected error", exc_info=result
                )
                continue
            if isinstance(result, BaseException):
                raise result
            text = result.strip()[:MAX_FILE_CHARS]
            if text:
                documents.append(BriefingDocument(path=path, text=text))
        return documents

    @staticmethod
    def concatenate(documents: Sequence[BriefingDocument]) -> str:
        return "\n\n".join(document.render() for document in documents)

    async def summarize(self, content: str, model: ModelConfig) -> str:
        """Compress concatenated briefings.

        Gateway failures other than 429/402 fall back to the raw content.
        """
        messages = [
            LLMMessage.system(SUMMARY_SYSTEM_PROMPT),
            LLMMessage.user(SUMMARY_USER_TEMPLATE.format(content=content)),
        ]
        try:
            response = await self.gateway.chat(messages, model, purpose="briefing")
        except LLMError as e:
            error = e.to_pipeline_error()
            if not isinstance(error, UpstreamGatewayError):
                raise error from e
            logger.warning(f"Briefing summarization failed, using raw content: {e.message}")
            return content
        return response.content.strip() or content

    async def aggregate(self, paths: Sequence[str], model: ModelConfig) -> str | None:
        """Return summarized briefing text, or None when nothing was retrieved."""
        if not paths:
            return None
        documents = await self.fetch(paths)
        if not documents:
            logger.info("No briefing content retrieved")
            return None
        logger.info(f"Retrieved {len(documents)}/{len(paths)} briefing files")
        return await self.summarize(self.concatenate(documents), model)
