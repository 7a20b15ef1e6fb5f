"""
Pydantic models for flow requests and responses.

Attributes are snake_case in Python; JSON (HTTP bodies and model replies)
uses the camelCase aliases.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FlowModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== DECOMPILE ====================

class DecompileInput(FlowModel):
    obfuscated_code: str = Field(..., description="The obfuscated malware source code to decompile.")


class DecompileOutput(FlowModel):
    decompiled_code: str = Field(..., description="The decompiled, de-obfuscated version of the code.")
    analysis_report: str = Field(..., description="A report describing what the code does and how it is obfuscated.")
    potential_threats: str = Field(..., description="The potential threats posed by the code.")


# ==================== BINARY ANALYSIS ====================

class AnalyzeBinaryInput(FlowModel):
    binary_code: str = Field(
        ...,
        description="The binary code to analyze, as a data URI that must include a MIME type and use Base64 "
                    "encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'.",
    )


class AnalyzeBinaryOutput(FlowModel):
    vulnerabilities: List[str] = Field(..., description="A list of potential vulnerabilities identified in the binary code.")
    malicious_behavior: List[str] = Field(..., description="A list of potential malicious behaviors identified in the binary code.")
    summary: str = Field(..., description="A summary of the analysis of the binary code.")


# ==================== SYNTHESIS ====================

class SynthesizeInput(FlowModel):
    decompiled_code: str = Field(..., description="The decompiled malware code to be synthesized.")


class SynthesizeOutput(FlowModel):
    readable_code: str = Field(..., description="The synthesized, readable code representing the malware functionality.")


# ==================== COMBINED ANALYSIS ====================

class PerformAnalysisInput(FlowModel):
    obfuscated_code: Optional[str] = Field(None, description="Obfuscated source code to decompile.")
    binary_data_uri: Optional[str] = Field(
        None,
        description="A binary file to analyze, as a data URI. Expected format: 'data:<mimetype>;base64,<encoded_data>'.",
    )


class PerformAnalysisOutput(FlowModel):
    decompilation_result: Optional[DecompileOutput] = None
    binary_analysis_result: Optional[AnalyzeBinaryOutput] = None
