import logging
from langchain_google_genai import ChatGoogleGenerativeAI

from misinfo_lens.core.config import config

logger = logging.getLogger(__name__)


class LLMWrapper:
    """
    Centralized LLM Wrapper for Misinfo Lens.

    Standardizes model configuration for the classifier and source agents.
    Built on first use so the service can start without credentials.
    """

    _instance = None

    def __init__(self):
        self.model_name = config.LLM_MODEL_NAME
        self.temperature = config.LLM_TEMPERATURE
        self.max_tokens = config.LLM_MAX_TOKEN
        self.timeout = config.LLM_TIMEOUT
        self.api_key = config.GEMINI_API_KEY

        if not self.api_key:
            raise ValueError("GEMINI_API_KEY is not set in the environment variables.")

        self.llm = ChatGoogleGenerativeAI(
            model=self.model_name,
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            timeout=self.timeout,
            google_api_key=self.api_key,
        )
        logger.info(f"Initialized LLM {self.model_name}")

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def get_llm(self):
        """Returns the underlying LLM instance."""
        return self.llm


def get_llm():
    return LLMWrapper.get_instance().get_llm()
