"""Synthesis flow: turns decompiled code into readable code."""

import logging
from typing import Optional
from ..errors import InvalidInputError
from ..logging_config import log_flow
from .model import ModelInvoker, default_invoker
from .prompts import SYNTHESIZE_PROMPT
from .schemas import SynthesizeInput, SynthesizeOutput

log = logging.getLogger("flows.synthesize")

@log_flow("synthesize_readable_code")
async def synthesize_readable_code(req: SynthesizeInput, invoker: Optional[ModelInvoker] = None) -> SynthesizeOutput:
    if not (req.decompiled_code or "").strip():
        raise InvalidInputError("decompiled code is required for synthesis")
    invoker = invoker or default_invoker()
    return await invoker.invoke(
        SYNTHESIZE_PROMPT,
        {"decompiled_code": req.decompiled_code},
        SynthesizeOutput,
    )
