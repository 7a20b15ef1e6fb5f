import logging
from langchain_core.runnables import RunnableConfig
from ..state import State
from ..decompile import decompile_malware
from ..schemas import DecompileInput

log = logging.getLogger("flows.nodes.decompile")

async def decompile_node(state: State, config: RunnableConfig) -> State:
    invoker = (config.get("configurable") or {}).get("invoker")
    try:
        out = await decompile_malware(DecompileInput(obfuscated_code=state["obfuscated_code"]), invoker)
    except Exception as e:
        log.warning("decompile branch failed: %s", e)
        return {"decompile_error": e}
    log.info("decompile branch completed")
    return {"decompilation_result": out}
