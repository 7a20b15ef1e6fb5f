from typing import Optional, TypedDict
from .schemas import AnalyzeBinaryOutput, DecompileOutput

class State(TypedDict, total=False):
    obfuscated_code: Optional[str]
    binary_data_uri: Optional[str]
    decompilation_result: DecompileOutput
    decompile_error: Exception
    binary_analysis_result: AnalyzeBinaryOutput
    binary_error: Exception
