import logging
from langchain_core.runnables import RunnableConfig
from ..state import State
from ..analyze_binary import analyze_binary_code
from ..schemas import AnalyzeBinaryInput

log = logging.getLogger("flows.nodes.analyze_binary")

async def analyze_binary_node(state: State, config: RunnableConfig) -> State:
    invoker = (config.get("configurable") or {}).get("invoker")
    try:
        out = await analyze_binary_code(AnalyzeBinaryInput(binary_code=state["binary_data_uri"]), invoker)
    except Exception as e:
        log.warning("binary analysis branch failed: %s", e)
        return {"binary_error": e}
    log.info("binary analysis branch completed")
    return {"binary_analysis_result": out}
