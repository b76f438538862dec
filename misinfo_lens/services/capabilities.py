from typing import List, Protocol, runtime_checkable

from misinfo_lens.core.models import AnalysisVerdict


@runtime_checkable
class AnalysisCapability(Protocol):
    """Classifies text as misinformation or not. Single shot, no retries."""

    async def classify(self, text: str) -> AnalysisVerdict: ...


@runtime_checkable
class SourceRetrievalCapability(Protocol):
    """Returns alternative source URLs drawn from a single trusted organization."""

    async def find_sources(self, text: str) -> List[str]: ...
