from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FlowPrompt:
    """A named prompt: fixed system instructions plus a human-message template.

    `template` uses `{variable}` placeholders filled from `input_variables`.
    """
    name: str
    instructions: str
    template: str
    input_variables: Tuple[str, ...]


DECOMPILE_PROMPT = FlowPrompt(
    name="decompileMalwarePrompt",
    instructions=(
        """
        You are an expert reverse engineer specializing in malware analysis and code de-obfuscation.

        You will receive obfuscated malware source code. Your job is to:
        1) Synthesize a decompiled, de-obfuscated version of the code: resolve string encodings,
           rename meaningless identifiers after their purpose, remove dead code and unpack
           eval/packer layers where the logic is visible in the input.
        2) Write an analysis report explaining what the code does, step by step, and which
           obfuscation techniques it uses.
        3) List the potential threats the code poses (data theft, persistence, remote control,
           propagation, destructive actions, ...), citing the code that evidences each one.

        RULES
        - Reason only from the code provided. Do not execute anything.
        - If a behavior cannot be confirmed from the code, label it "possible".
        - Never output internal reasoning; provide only the final structured result.
        """
    ),
    template="Obfuscated Code:\n{obfuscated_code}",
    input_variables=("obfuscated_code",),
)


ANALYZE_BINARY_PROMPT = FlowPrompt(
    name="analyzeBinaryCodePrompt",
    instructions=(
        """
        You are an expert security researcher specializing in analyzing binary code for vulnerabilities
        and malicious behavior.

        You will analyze Base64 encoded binary data to identify potential vulnerabilities and malicious
        behaviors.

        Provide a list of potential vulnerabilities, a list of potential malicious behaviors, and a summary
        of the analysis. Be thorough and detailed. Use an empty list when nothing is observed.
        """
    ),
    template="Binary Data (Base64 Encoded):\n{binary_content_base64}",
    input_variables=("binary_content_base64",),
)


SYNTHESIZE_PROMPT = FlowPrompt(
    name="synthesizeReadableCodePrompt",
    instructions=(
        """
        You are an expert reverse engineer specializing in malware analysis.

        You will receive decompiled malware code and synthesize it into readable, understandable code that
        reveals its functionality. Keep the behavior identical, use descriptive names and add short comments
        where a step is not obvious. Return the code as a single string.
        """
    ),
    template="Decompiled Code:\n{decompiled_code}",
    input_variables=("decompiled_code",),
)


def output_format_instructions(schema_json: str) -> str:
    return (
        "\n\nOUTPUT FORMAT\n"
        "Return exactly one JSON object that validates against this JSON Schema "
        "(strict JSON, double-quoted keys, no comments, no markdown fences):\n"
        + schema_json
    )
