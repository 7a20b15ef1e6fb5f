"""Binary analysis flow: forwards the Base64 payload of a data URI to the model."""

import logging
from typing import Optional
from ..errors import InvalidInputError
from ..logging_config import log_flow
from .model import ModelInvoker, default_invoker
from .prompts import ANALYZE_BINARY_PROMPT
from .schemas import AnalyzeBinaryInput, AnalyzeBinaryOutput

log = logging.getLogger("flows.analyze_binary")

def extract_base64_payload(data_uri: str) -> str:
    """
    Return the payload of `data:<mimetype>;base64,<encoded_data>`.

    Splits on the first comma only; a missing comma or an empty payload raises
    InvalidInputError.
    """
    parts = (data_uri or "").split(",", 1)
    if len(parts) < 2 or not parts[1]:
        raise InvalidInputError("Invalid data URI format: could not extract payload from data URI.")
    return parts[1]

@log_flow("analyze_binary_code")
async def analyze_binary_code(req: AnalyzeBinaryInput, invoker: Optional[ModelInvoker] = None) -> AnalyzeBinaryOutput:
    payload = extract_base64_payload(req.binary_code)
    invoker = invoker or default_invoker()
    log.info("analyze_binary: header=%s payload=%d chars", req.binary_code.split(",", 1)[0][:80], len(payload))
    return await invoker.invoke(
        ANALYZE_BINARY_PROMPT,
        {"binary_content_base64": payload},
        AnalyzeBinaryOutput,
    )
