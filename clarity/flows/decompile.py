"""Decompile flow: de-obfuscates malware source text through the model."""

import logging
from typing import Optional
from ..errors import InvalidInputError
from ..logging_config import log_flow
from .model import ModelInvoker, default_invoker
from .prompts import DECOMPILE_PROMPT
from .schemas import DecompileInput, DecompileOutput

log = logging.getLogger("flows.decompile")

@log_flow("decompile_malware")
async def decompile_malware(req: DecompileInput, invoker: Optional[ModelInvoker] = None) -> DecompileOutput:
    if not (req.obfuscated_code or "").strip():
        raise InvalidInputError("obfuscated code is required for decompilation")
    invoker = invoker or default_invoker()
    log.info("decompile: %d chars of obfuscated code", len(req.obfuscated_code))
    return await invoker.invoke(
        DECOMPILE_PROMPT,
        {"obfuscated_code": req.obfuscated_code},
        DecompileOutput,
    )
