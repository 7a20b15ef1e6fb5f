"""Model-invocation collaborator: runs a FlowPrompt against Gemini and validates the reply."""

import json, logging
from typing import Any, Dict, Optional, Protocol, Type, TypeVar
from pydantic import BaseModel, ValidationError
from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI as ChatLLM
from ..config import get_settings
from ..errors import InvalidInputError, ModelInvocationError, SchemaValidationError
from ..tools.helpers import message_text, parse_model_json
from .prompts import FlowPrompt, output_format_instructions

log = logging.getLogger("flows.model")

T = TypeVar("T", bound=BaseModel)


class ModelInvoker(Protocol):
    async def invoke(self, prompt: FlowPrompt, variables: Dict[str, Any], output_schema: Type[T]) -> T:
        ...


class GeminiInvoker:
    """Sends prompts to a chat model and returns schema-validated output.

    `llm` may be any LangChain runnable accepting chat messages; when omitted a
    `ChatGoogleGenerativeAI` client is built from settings on first use.
    """

    def __init__(self, llm: Any = None, model: Optional[str] = None):
        self._llm = llm
        self.model = model

    @property
    def llm(self):
        if self._llm is None:
            settings = get_settings()
            self._llm = ChatLLM(
                model=self.model or settings.get("GEMINI_MODEL", "gemini-2.0-flash"),
                temperature=settings.get("MODEL_TEMPERATURE", 0.2),
                google_api_key=settings.get("GEMINI_API_KEY") or None,
                timeout=settings.get("DEFAULT_TIMEOUT", 60),
            )
        return self._llm

    async def invoke(self, prompt: FlowPrompt, variables: Dict[str, Any], output_schema: Type[T]) -> T:
        missing = [v for v in prompt.input_variables if v not in variables]
        if missing:
            raise InvalidInputError(f"{prompt.name}: missing prompt variables {missing}")

        schema_json = json.dumps(output_schema.model_json_schema(), ensure_ascii=False)
        template = ChatPromptTemplate.from_messages([
            ("system", "{instructions}"),
            ("human", prompt.template),
        ])
        payload = {"instructions": prompt.instructions + output_format_instructions(schema_json)}
        payload.update({k: variables[k] for k in prompt.input_variables})

        try:
            chain = template | self.llm
            out = await chain.ainvoke(payload)
        except Exception as e:
            log.warning("%s: model call failed: %s", prompt.name, e)
            raise ModelInvocationError(str(e) or type(e).__name__) from e

        text = message_text(getattr(out, "content", out))
        data = parse_model_json(text)
        if data is None:
            log.warning("%s: non-JSON output (%d chars)", prompt.name, len(text))
            raise SchemaValidationError(f"The AI model did not return the expected output for {prompt.name}.")
        try:
            result = output_schema.model_validate(data)
        except ValidationError as e:
            log.warning("%s: output failed validation: %s", prompt.name, e)
            raise SchemaValidationError(
                f"The AI model output for {prompt.name} does not match {output_schema.__name__} "
                f"({e.error_count()} validation error(s))."
            ) from e
        log.debug("%s: output validated as %s", prompt.name, output_schema.__name__)
        return result


def default_invoker() -> GeminiInvoker:
    return GeminiInvoker()
