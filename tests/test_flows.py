import asyncio
import pytest
from clarity.errors import InvalidInputError, ModelInvocationError, SchemaValidationError
from clarity.flows.analyze_binary import analyze_binary_code, extract_base64_payload
from clarity.flows.decompile import decompile_malware
from clarity.flows.synthesize import synthesize_readable_code
from clarity.flows.schemas import (
    AnalyzeBinaryInput,
    AnalyzeBinaryOutput,
    DecompileInput,
    DecompileOutput,
    SynthesizeInput,
)

@pytest.mark.parametrize("uri", [
    "no comma here",
    "",
    "data:application/octet-stream;base64,",
])
def test_extract_base64_payload_rejects_malformed(uri):
    """A missing comma or an empty payload is invalid input."""
    with pytest.raises(InvalidInputError, match="could not extract payload"):
        extract_base64_payload(uri)

def test_extract_base64_payload_returns_payload():
    """Only the segment after the first comma is returned."""
    assert extract_base64_payload("data:application/octet-stream;base64,AAA=") == "AAA="
    assert extract_base64_payload("data:text/plain;base64,a,b") == "a,b"

def test_analyze_binary_invalid_uri_never_calls_model(make_invoker):
    """Payload extraction fails before the model is reached."""
    inv = make_invoker()
    with pytest.raises(InvalidInputError):
        asyncio.run(analyze_binary_code(AnalyzeBinaryInput(binary_code="data:x;base64,"), inv))
    assert inv.calls == []

def test_analyze_binary_forwards_payload_only(make_invoker):
    """The model sees the Base64 payload, not the data-URI header."""
    inv = make_invoker()
    out = asyncio.run(analyze_binary_code(
        AnalyzeBinaryInput(binary_code="data:application/octet-stream;base64,TVo="), inv))
    assert isinstance(out, AnalyzeBinaryOutput)
    assert out.malicious_behavior == ["Writes a Run key for persistence"]
    assert inv.calls == [("analyzeBinaryCodePrompt", {"binary_content_base64": "TVo="})]

def test_decompile_embeds_code_verbatim(make_invoker):
    """Obfuscated code reaches the model unchanged."""
    inv = make_invoker()
    code = "eval(atob('dmFyIGE9MTs='));{x}"
    out = asyncio.run(decompile_malware(DecompileInput(obfuscated_code=code), inv))
    assert isinstance(out, DecompileOutput)
    assert out.decompiled_code == "var counter = 1;"
    assert inv.calls == [("decompileMalwarePrompt", {"obfuscated_code": code})]

def test_decompile_rejects_blank_code(make_invoker):
    inv = make_invoker()
    with pytest.raises(InvalidInputError):
        asyncio.run(decompile_malware(DecompileInput(obfuscated_code="   "), inv))
    assert inv.calls == []

def test_decompile_propagates_model_errors(make_invoker):
    """Collaborator errors are not swallowed at the operation boundary."""
    inv = make_invoker({"decompileMalwarePrompt": ModelInvocationError("quota exceeded")})
    with pytest.raises(ModelInvocationError, match="quota exceeded"):
        asyncio.run(decompile_malware(DecompileInput(obfuscated_code="var a=1;"), inv))

def test_synthesize_returns_readable_code(make_invoker):
    inv = make_invoker()
    out = asyncio.run(synthesize_readable_code(SynthesizeInput(decompiled_code="var a=1;"), inv))
    assert out.readable_code.startswith("let counter")
    assert inv.calls == [("synthesizeReadableCodePrompt", {"decompiled_code": "var a=1;"})]

def test_synthesize_errors(make_invoker):
    """Blank input is rejected locally; missing output is a schema error."""
    inv = make_invoker({"synthesizeReadableCodePrompt": SchemaValidationError("empty")})
    with pytest.raises(InvalidInputError):
        asyncio.run(synthesize_readable_code(SynthesizeInput(decompiled_code=""), inv))
    with pytest.raises(SchemaValidationError):
        asyncio.run(synthesize_readable_code(SynthesizeInput(decompiled_code="x"), inv))

def test_schemas_use_camel_case_aliases():
    """Wire JSON is camelCase while Python attributes are snake_case."""
    out = DecompileOutput.model_validate({
        "decompiledCode": "a", "analysisReport": "b", "potentialThreats": "c",
    })
    assert out.analysis_report == "b"
    assert set(out.model_dump(by_alias=True)) == {"decompiledCode", "analysisReport", "potentialThreats"}
    assert DecompileInput(obfuscated_code="x").obfuscated_code == "x"
