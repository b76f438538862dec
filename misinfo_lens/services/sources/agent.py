# misinfo_lens/services/sources/agent.py
import logging
from typing import List, Optional

from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers import JsonOutputParser

from misinfo_lens.core.config import config
from misinfo_lens.core.exceptions import RetrievalFailure
from misinfo_lens.core.models import SourceList
from misinfo_lens.services.llm_wrapper import get_llm
from misinfo_lens.services.sources.tools import parse_source_urls

log = logging.getLogger(__name__)


class TrustedSourceAgent:
    """
    Suggests alternative, authoritative pages for text already flagged as
    misinformation. Every returned URL belongs to the configured trust domain.
    Satisfies the SourceRetrievalCapability contract.
    """

    def __init__(
        self,
        llm=None,
        source_name: Optional[str] = None,
        domain: Optional[str] = None,
        max_sources: Optional[int] = None,
    ):
        self.llm = llm if llm is not None else get_llm()
        self.source_name = source_name if source_name is not None else config.TRUSTED_SOURCE_NAME
        self.domain = domain if domain is not None else config.TRUSTED_SOURCE_DOMAIN
        self.max_sources = max_sources if max_sources is not None else config.MAX_SOURCES
        self.parser = JsonOutputParser(pydantic_object=SourceList)

        self.prompt = ChatPromptTemplate.from_messages([
            ("system", """
You are a research librarian. The text below was judged to be misinformation.

Your job:
- List pages published by {source_name} that give accurate information on the same topic
- Only use URLs on the {domain} domain
- Return at most {max_sources} URLs, most relevant first
- Return an empty list if you know of no suitable page. Do not invent URLs.

{format_instructions}
"""),
            ("human", """
Text: {text}

Respond with valid JSON only.
""")
        ])

        self.chain = self.prompt | self.llm | self.parser

    async def find_sources(self, text: str) -> List[str]:
        log.info(f"TrustedSourceAgent searching {self.domain} for: {text[:60]}...")
        try:
            raw = await self.chain.ainvoke({
                "text": text,
                "source_name": self.source_name,
                "domain": self.domain,
                "max_sources": self.max_sources,
                "format_instructions": self.parser.get_format_instructions()
            })
            sources = parse_source_urls(raw, self.domain, self.max_sources)
        except Exception as e:
            log.error(f"Source retrieval failed in TrustedSourceAgent: {e}")
            raise RetrievalFailure(f"Source retrieval failed: {e}") from e

        log.info(f"Found {len(sources)} sources on {self.domain}")
        return sources
