"""generate-seo-content endpoint.

POST runs the pipeline; OPTIONS answers CORS preflight with 204.
The body is validated here (not by FastAPI) so schema violations produce the
``{error, details}`` 400 contract instead of FastAPI's 422.
"""

import json
import logging
import uuid
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from seogen.api.auth import get_current_user
from seogen.api.auth.schemas import AuthUser
from seogen.api.core.errors import PipelineError, RequestValidationError
from seogen.api.core.state import RequestState, RequestTrace
from seogen.api.generation.briefing import BriefingAggregator
from seogen.api.generation.orchestrator import GenerationOrchestrator
from seogen.api.llm import AIGatewayClient
from seogen.api.observability.logger import clear_context, set_context
from seogen.api.schemas.generation import GenerationRequest
from seogen.api.storage import BriefingStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generation"])

# Singleton orchestrator
_orchestrator: GenerationOrchestrator | None = None


def get_orchestrator() -> GenerationOrchestrator:
    """Get or create the orchestrator singleton."""
    global _orchestrator
    if _orchestrator is None:
        gateway = AIGatewayClient()
        _orchestrator = GenerationOrchestrator(
            gateway=gateway,
            briefing_aggregator=BriefingAggregator(BriefingStore(), gateway),
        )
    return _orchestrator


def validation_details(error: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by wire field name."""
    details: dict[str, list[str]] = {}
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "body"
        details.setdefault(field, []).append(item["msg"])
    return details


async def parse_generation_request(request: Request) -> GenerationRequest:
    """Decode and validate the JSON body.

    Raises:
        RequestValidationError: Body is not JSON or violates the schema
    """
    try:
        raw: Any = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestValidationError({"body": [f"Invalid JSON: {e}"]}) from e

    if not isinstance(raw, dict):
        raise RequestValidationError({"body": ["Expected a JSON object"]})

    try:
        return GenerationRequest.model_validate(raw)
    except ValidationError as e:
        details = validation_details(e)
        logger.info(f"Validation error: {details}")
        raise RequestValidationError(details) from e


@router.options("/generate-seo-content", status_code=status.HTTP_204_NO_CONTENT)
async def generate_preflight() -> Response:
    """CORS preflight."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/generate-seo-content")
async def generate_seo_content(
    request: Request,
    user: AuthUser = Depends(get_current_user),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    """Run one generation request (any mode)."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
    trace = RequestTrace(request_id=request_id)
    set_context(request_id=request_id, user_id=user.user_id)
    try:
        trace.advance(RequestState.AUTHENTICATED)
        try:
            body = await parse_generation_request(request)
        except RequestValidationError:
            trace.fail(RequestState.REJECTED_INVALID_INPUT)
            raise
        trace.advance(RequestState.VALIDATED)

        logger.info(
            "Generating SEO content: mode=%s, pageType=%s, promptVersion=%s, files=%d",
            body.mode,
            body.page_type,
            body.prompt_version,
            len(body.briefing_files),
        )
        try:
            result = await orchestrator.run(body, trace)
        except PipelineError as e:
            trace.fail(e.error_state)
            raise
        except Exception:
            trace.fail(RequestState.INTERNAL_ERROR)
            raise

        logger.info(
            "Request %s finished: %s",
            request_id,
            " -> ".join(state.value for state in trace.history),
        )
        return JSONResponse(content=result)
    finally:
        clear_context()
