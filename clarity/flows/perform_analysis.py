"""Combined analysis: runs decompilation and binary analysis side by side.

Both branches are settled before anything is decided. A request fails only
when every attempted branch failed; a single surviving branch is returned as
a partial result with the other field left empty.
"""

import logging
from typing import List, Optional, Tuple
from ..errors import AnalysisFailedError, InvalidInputError, SchemaValidationError
from ..logging_config import log_flow
from .graph import build_graph
from .model import ModelInvoker, default_invoker
from .schemas import PerformAnalysisInput, PerformAnalysisOutput
from .state import State

log = logging.getLogger("flows.perform_analysis")

STAGE_DECOMPILE = "Decompilation"
STAGE_BINARY = "Binary analysis"


def describe_error(e: BaseException) -> str:
    return str(e) or type(e).__name__


def _branch_failure(state: State, result_key: str, error_key: str, stage: str) -> Optional[Tuple[str, BaseException]]:
    if state.get(result_key) is not None:
        return None
    err = state.get(error_key) or SchemaValidationError(f"{stage} did not produce a result.")
    return stage, err


def aggregate_outcomes(attempted_decompile: bool, attempted_binary: bool, state: State) -> PerformAnalysisOutput:
    """Turn settled branch outcomes into a result, or raise AnalysisFailedError.

    Depends only on the final state, never on the order branches finished in.
    """
    failures: List[Tuple[str, BaseException]] = []
    attempted = 0
    if attempted_decompile:
        attempted += 1
        f = _branch_failure(state, "decompilation_result", "decompile_error", STAGE_DECOMPILE)
        if f:
            failures.append(f)
    if attempted_binary:
        attempted += 1
        f = _branch_failure(state, "binary_analysis_result", "binary_error", STAGE_BINARY)
        if f:
            failures.append(f)

    if failures and len(failures) == attempted:
        message = "; ".join(f"{stage} failed: {describe_error(e)}" for stage, e in failures)
        cause = failures[0][1] if len(failures) == 1 else None
        raise AnalysisFailedError(message, failures) from cause

    for stage, e in failures:
        log.warning("partial result: %s failed: %s", stage, describe_error(e))

    return PerformAnalysisOutput(
        decompilation_result=state.get("decompilation_result") if attempted_decompile else None,
        binary_analysis_result=state.get("binary_analysis_result") if attempted_binary else None,
    )


@log_flow("perform_analysis")
async def perform_analysis(req: PerformAnalysisInput, invoker: Optional[ModelInvoker] = None) -> PerformAnalysisOutput:
    attempted_decompile = bool(req.obfuscated_code)
    attempted_binary = bool(req.binary_data_uri)
    if not (attempted_decompile or attempted_binary):
        raise InvalidInputError("at least one of obfuscated code or binary data is required")

    invoker = invoker or default_invoker()
    app = build_graph()
    init: State = {
        "obfuscated_code": req.obfuscated_code if attempted_decompile else None,
        "binary_data_uri": req.binary_data_uri if attempted_binary else None,
    }
    log.info("perform_analysis: decompile=%s binary=%s", attempted_decompile, attempted_binary)
    final = await app.ainvoke(init, config={"configurable": {"invoker": invoker}})
    return aggregate_outcomes(attempted_decompile, attempted_binary, final)
