import asyncio
from typing import Dict, List

import pytest

from misinfo_lens.core.models import AnalysisVerdict
from misinfo_lens.services.orchestrator import AnalysisOrchestrator


class FakeClassifier:
    """Deterministic AnalysisCapability keyed by input text."""

    def __init__(self, verdicts: Dict[str, AnalysisVerdict], error: Exception = None):
        self.verdicts = verdicts
        self.error = error
        self.calls: List[str] = []

    async def classify(self, text: str) -> AnalysisVerdict:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.verdicts[text]


class FakeRetriever:
    """Deterministic SourceRetrievalCapability keyed by input text."""

    def __init__(self, sources: Dict[str, List[str]] = None, error: Exception = None):
        self.sources = sources or {}
        self.error = error
        self.calls: List[str] = []

    async def find_sources(self, text: str) -> List[str]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.sources.get(text, [])


class GatedClassifier:
    """Classifier whose calls block until the test releases them."""

    def __init__(self, verdicts: Dict[str, AnalysisVerdict]):
        self.verdicts = verdicts
        self.started = {text: asyncio.Event() for text in verdicts}
        self.release = {text: asyncio.Event() for text in verdicts}

    async def classify(self, text: str) -> AnalysisVerdict:
        self.started[text].set()
        await self.release[text].wait()
        return self.verdicts[text]


class GatedRetriever:
    """Retriever whose calls block until the test releases them."""

    def __init__(self, sources: Dict[str, List[str]], errors: Dict[str, Exception] = None):
        self.sources = sources
        self.errors = errors or {}
        self.started = {text: asyncio.Event() for text in sources}
        self.release = {text: asyncio.Event() for text in sources}

    async def find_sources(self, text: str) -> List[str]:
        self.started[text].set()
        await self.release[text].wait()
        if text in self.errors:
            raise self.errors[text]
        return self.sources[text]


FLAT_EARTH = "The earth is flat"
BOILING = "Water boils at 100C at sea level"
WHO_SOURCES = ["https://who.int/x", "https://who.int/y"]


@pytest.fixture
def classifier():
    return FakeClassifier({
        FLAT_EARTH: AnalysisVerdict(is_misinformation=True, reason="Contradicted by scientific consensus"),
        BOILING: AnalysisVerdict(is_misinformation=False, reason="Accurate"),
    })


@pytest.fixture
def retriever():
    return FakeRetriever({FLAT_EARTH: WHO_SOURCES})


@pytest.fixture
def orchestrator(classifier, retriever):
    return AnalysisOrchestrator(classifier=classifier, retriever=retriever)
