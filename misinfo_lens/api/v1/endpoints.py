# misinfo_lens/api/v1/endpoints.py
import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from misinfo_lens.core.config import config
from misinfo_lens.core.exceptions import NoRecordAvailable
from misinfo_lens.core.models import AnalysisRequest, AnalysisResponse, WorkflowState
from misinfo_lens.services.classifier.agent import MisinformationClassifierAgent
from misinfo_lens.services.orchestrator import AnalysisOrchestrator
from misinfo_lens.services.sources.agent import TrustedSourceAgent

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter(prefix=config.API_PREFIX, tags=["v1"])

_orchestrator = None


def get_orchestrator() -> AnalysisOrchestrator:
    """One orchestrator per process, built on first request."""
    global _orchestrator
    if _orchestrator is None:
        try:
            _orchestrator = AnalysisOrchestrator(
                classifier=MisinformationClassifierAgent(),
                retriever=TrustedSourceAgent(),
            )
        except ValueError as e:
            logger.error(f"Cannot build orchestrator: {e}")
            raise HTTPException(status_code=503, detail=str(e))
    return _orchestrator


def to_response(state: WorkflowState) -> AnalysisResponse:
    record = state.result
    return AnalysisResponse(
        status=state.status,
        is_loading=state.is_loading,
        attempt_id=getattr(state, "attempt_id", None),
        is_misinformation=record.verdict.is_misinformation if record else None,
        reason=record.verdict.reason if record else None,
        sources=list(record.sources) if record else [],
        error=getattr(state, "error", None),
    )


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_text(
    request: AnalysisRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> AnalysisResponse:
    """
    Main endpoint: classify the submitted text and, when it is
    misinformation, look up alternative trusted sources.
    """
    logger.info(f"Received analysis request ({len(request.text)} chars)")

    state = await orchestrator.submit(request.text)
    if state.status == "failed":
        raise HTTPException(
            status_code=502,
            detail={
                "message": "Analysis could not be completed. Please try again.",
                "kind": state.error.kind,
                "error": state.error.message,
            },
        )
    return to_response(state)


@router.get("/analysis", response_model=AnalysisResponse)
async def current_analysis(
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> AnalysisResponse:
    return to_response(orchestrator.state)


@router.get("/report", response_class=PlainTextResponse)
async def download_report(
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> PlainTextResponse:
    """Download the latest completed analysis as a plain-text file."""
    try:
        artifact = orchestrator.export_report()
    except NoRecordAvailable as e:
        raise HTTPException(status_code=404, detail=str(e))

    return PlainTextResponse(
        content=artifact.content,
        media_type=artifact.content_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.file_name}"'},
    )
