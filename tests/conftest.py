import os
import sys
import asyncio
import pytest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FILE", "")

from clarity.errors import SchemaValidationError

DECOMPILE_OK = {
    "decompiledCode": "var counter = 1;",
    "analysisReport": "Declares a single counter variable.",
    "potentialThreats": "None observed.",
}
BINARY_OK = {
    "vulnerabilities": ["Stack buffer overflow in input parser"],
    "maliciousBehavior": ["Writes a Run key for persistence"],
    "summary": "Small PE dropper.",
}
SYNTHESIZE_OK = {"readableCode": "let counter = 1; // initial value"}


class FakeInvoker:
    """Stands in for the Gemini collaborator.

    `responses` maps prompt names to a JSON-like dict (validated against the
    requested schema) or an exception to raise. `delays` maps prompt names to
    seconds slept before answering. `events` records ("start"|"end", name).
    """

    def __init__(self, responses=None, delays=None):
        self.responses = {
            "decompileMalwarePrompt": DECOMPILE_OK,
            "analyzeBinaryCodePrompt": BINARY_OK,
            "synthesizeReadableCodePrompt": SYNTHESIZE_OK,
        }
        self.responses.update(responses or {})
        self.delays = delays or {}
        self.calls = []
        self.events = []

    async def invoke(self, prompt, variables, output_schema):
        self.calls.append((prompt.name, dict(variables)))
        self.events.append(("start", prompt.name))
        try:
            delay = self.delays.get(prompt.name, 0)
            if delay:
                await asyncio.sleep(delay)
            out = self.responses.get(prompt.name)
            if isinstance(out, BaseException):
                raise out
            if out is None:
                raise SchemaValidationError(f"no output for {prompt.name}")
            return output_schema.model_validate(out)
        finally:
            self.events.append(("end", prompt.name))


@pytest.fixture
def set_env(monkeypatch):
    """Alias of pytest fixture for readability in tests."""
    return monkeypatch

@pytest.fixture
def make_invoker():
    """Factory for FakeInvoker instances."""
    return FakeInvoker
