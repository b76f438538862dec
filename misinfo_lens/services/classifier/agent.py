# misinfo_lens/services/classifier/agent.py
import logging

from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers import JsonOutputParser
from pydantic import ValidationError

from misinfo_lens.core.exceptions import ClassificationFailure
from misinfo_lens.core.models import AnalysisVerdict
from misinfo_lens.services.llm_wrapper import get_llm

log = logging.getLogger(__name__)


class MisinformationClassifierAgent:
    """
    Decides whether a block of text is misinformation and explains why.
    Satisfies the AnalysisCapability contract.
    """

    def __init__(self, llm=None):
        self.llm = llm if llm is not None else get_llm()
        self.parser = JsonOutputParser(pydantic_object=AnalysisVerdict)

        self.prompt = ChatPromptTemplate.from_messages([
            ("system", """
        You are a professional fact-checker. Decide whether the text below is misinformation.

        Rules:
        - Misinformation means false or misleading factual claims
        - Contradicts established scientific or official consensus → misinformation
        - Opinions, jokes and accurate statements are not misinformation
        - Give a short, neutral reason (one or two sentences)

        Return JSON only.
        {format_instructions}
            """),
            ("human", "Text: {text}")
        ])

        self.chain = self.prompt | self.llm | self.parser

    async def classify(self, text: str) -> AnalysisVerdict:
        log.info(f"MisinformationClassifierAgent classifying: {text[:60]}...")
        try:
            raw = await self.chain.ainvoke({
                "text": text,
                "format_instructions": self.parser.get_format_instructions()
            })
        except Exception as e:
            log.error(f"LLM failed in MisinformationClassifierAgent: {e}")
            raise ClassificationFailure(f"Classification failed: {e}") from e

        try:
            return AnalysisVerdict.model_validate(raw)
        except ValidationError as e:
            log.error(f"Malformed classifier output: {raw!r}")
            raise ClassificationFailure(f"Malformed classifier output: {e}") from e
