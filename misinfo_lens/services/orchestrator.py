import asyncio
import logging
from typing import Annotated, Callable, List, Optional, TypedDict

from langchain_core.runnables import RunnableConfig
from langgraph.graph import StateGraph, END

from misinfo_lens.core.exceptions import ClassificationFailure, RetrievalFailure
from misinfo_lens.core.models import (
    AnalysisRecord,
    AnalysisRequest,
    AnalysisVerdict,
    Analyzing,
    Completed,
    ErrorInfo,
    Failed,
    Idle,
    WorkflowState,
)
from misinfo_lens.services.capabilities import AnalysisCapability, SourceRetrievalCapability
from misinfo_lens.services.report import ReportArtifact, build_report_artifact


logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class AttemptState(TypedDict):
    text: str
    verdict: Annotated[Optional[AnalysisVerdict], "Classifier verdict"]
    sources: Annotated[Optional[List[str]], "Alternative sources, None until fetched"]
    error: Annotated[Optional[ErrorInfo], "Failure details, if any"]


def _error_info(exc: Exception, failure_type) -> ErrorInfo:
    if not isinstance(exc, failure_type):
        exc = failure_type(str(exc) or type(exc).__name__)
    return ErrorInfo(kind=failure_type.kind, message=str(exc))


def build_analysis_graph(
    classifier: AnalysisCapability,
    retriever: SourceRetrievalCapability,
    on_stage: Optional[Callable[[Optional[int], str], None]] = None,
):
    """
    Compile the classify -> (find sources) graph.

    ``on_stage`` is told which capability an attempt is waiting on, keyed by
    the ``attempt_id`` passed in the run config.
    """

    def report_stage(config: RunnableConfig, stage: str) -> None:
        if on_stage is not None:
            on_stage(config.get("configurable", {}).get("attempt_id"), stage)

    # === Nodes ===
    async def classify_node(state: AttemptState, config: RunnableConfig) -> AttemptState:
        report_stage(config, ClassificationFailure.kind)
        try:
            verdict = await classifier.classify(state["text"])
            if not isinstance(verdict, AnalysisVerdict):
                verdict = AnalysisVerdict.model_validate(verdict)
        except Exception as e:
            logger.error(f"[classification] {e}")
            state["error"] = _error_info(e, ClassificationFailure)
            return state

        state["verdict"] = verdict
        if not verdict.is_misinformation:
            state["sources"] = []
        return state

    async def sources_node(state: AttemptState, config: RunnableConfig) -> AttemptState:
        report_stage(config, RetrievalFailure.kind)
        try:
            sources = await retriever.find_sources(state["text"])
            if not isinstance(sources, list) or not all(isinstance(s, str) for s in sources):
                raise RetrievalFailure(f"Malformed source list: {sources!r}")
        except Exception as e:
            logger.error(f"[retrieval] {e}")
            state["error"] = _error_info(e, RetrievalFailure)
            return state

        state["sources"] = sources
        return state

    def decide_next_step(state: AttemptState) -> str:
        if state.get("error") or not state["verdict"].is_misinformation:
            return END
        return "sources_node"

    workflow = StateGraph(state_schema=AttemptState)
    workflow.add_node("classify_node", classify_node)
    workflow.add_node("sources_node", sources_node)
    workflow.set_entry_point("classify_node")
    workflow.add_conditional_edges(
        "classify_node",
        decide_next_step,
        {
            "sources_node": "sources_node",
            END: END,
        },
    )
    workflow.add_edge("sources_node", END)
    return workflow.compile()


class AnalysisOrchestrator:
    """
    Owns the analysis lifecycle: Idle -> Analyzing -> Completed | Failed.

    Submissions may overlap. Each one is tagged with an attempt id and only
    the most recently submitted attempt may publish its outcome.
    """

    def __init__(self, classifier: AnalysisCapability, retriever: SourceRetrievalCapability):
        self.graph = build_analysis_graph(classifier, retriever, on_stage=self._record_stage)
        self._state: WorkflowState = Idle()
        self._attempt_id = 0
        self._stage = ClassificationFailure.kind

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def result(self) -> Optional[AnalysisRecord]:
        return self._state.result

    def _transition(self, new_state: WorkflowState) -> None:
        logger.info(f"Workflow {self._state.status} -> {new_state.status} (attempt {self._attempt_id})")
        self._state = new_state

    def _record_stage(self, attempt_id: Optional[int], stage: str) -> None:
        if attempt_id == self._attempt_id:
            self._stage = stage

    async def submit(self, text: str) -> WorkflowState:
        """Run one analysis attempt and return the published state."""
        request = AnalysisRequest(text=text)
        self._attempt_id += 1
        attempt_id = self._attempt_id
        self._stage = ClassificationFailure.kind
        self._transition(Analyzing(attempt_id=attempt_id))
        logger.info(f"Attempt {attempt_id} submitted: {request.text[:60]!r}")

        try:
            final_state = await self.graph.ainvoke(
                {
                    "text": request.text,
                    "verdict": None,
                    "sources": None,
                    "error": None,
                },
                config={"configurable": {"attempt_id": attempt_id}},
            )
        except BaseException as e:
            # Cancelled or crashed outside the nodes: never leave the attempt loading
            if attempt_id == self._attempt_id:
                message = "Analysis was cancelled" if isinstance(e, asyncio.CancelledError) else str(e)
                logger.error(f"[{self._stage}] attempt {attempt_id} aborted: {message or type(e).__name__}")
                self._transition(Failed(
                    attempt_id=attempt_id,
                    error=ErrorInfo(kind=self._stage, message=message or type(e).__name__),
                ))
            raise

        if final_state.get("error"):
            outcome = Failed(attempt_id=attempt_id, error=final_state["error"])
        else:
            outcome = Completed(
                attempt_id=attempt_id,
                record=AnalysisRecord(
                    verdict=final_state["verdict"],
                    sources=final_state["sources"],
                ),
            )

        if attempt_id != self._attempt_id:
            logger.info(
                f"Discarding {outcome.status} result of attempt {attempt_id}; "
                f"superseded by attempt {self._attempt_id}"
            )
            return self._state

        self._transition(outcome)
        return outcome

    def export_report(self) -> ReportArtifact:
        """Render the current record. Raises NoRecordAvailable without one."""
        return build_report_artifact(self._state.result)
