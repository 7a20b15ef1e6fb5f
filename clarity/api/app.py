import logging
from fastapi import FastAPI, UploadFile, File, Form, HTTPException, Depends
from contextlib import asynccontextmanager
from ..config import get_settings
from ..errors import ClarityError, InvalidInputError, AnalysisFailedError
from ..logging_config import configure_logging
from ..flows.model import ModelInvoker, default_invoker
from ..flows.decompile import decompile_malware
from ..flows.analyze_binary import analyze_binary_code
from ..flows.synthesize import synthesize_readable_code
from ..flows.perform_analysis import perform_analysis
from ..flows.schemas import (
    DecompileInput,
    DecompileOutput,
    AnalyzeBinaryInput,
    AnalyzeBinaryOutput,
    SynthesizeInput,
    SynthesizeOutput,
    PerformAnalysisInput,
    PerformAnalysisOutput,
)
from ..tools.helpers import compute_hashes, sniff_header, to_data_uri

log = logging.getLogger("api")

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().get("LOG_LEVEL"))
    log.info("API startup: log level configured")
    yield
    # Shutdown

app = FastAPI(title="Clarity API", version="0.1.0", lifespan=lifespan)

def get_invoker() -> ModelInvoker:
    return default_invoker()

def to_http_error(e: ClarityError) -> HTTPException:
    """Map the error taxonomy onto a status code with a single readable message."""
    if isinstance(e, InvalidInputError):
        status = 400
    elif isinstance(e, AnalysisFailedError) and e.invalid_input_only:
        status = 400
    else:
        status = 502
    return HTTPException(status_code=status, detail=str(e))

@app.get("/healthz")
def healthz():
    """Lightweight healthcheck endpoint."""
    return {"status": "ok"}

@app.post("/decompile", response_model=DecompileOutput)
async def decompile(req: DecompileInput, invoker: ModelInvoker = Depends(get_invoker)):
    """Decompile obfuscated source text."""
    try:
        return await decompile_malware(req, invoker)
    except ClarityError as e:
        log.warning("/decompile failed: %s", e)
        raise to_http_error(e) from e

@app.post("/analyze/binary", response_model=AnalyzeBinaryOutput)
async def analyze_binary(req: AnalyzeBinaryInput, invoker: ModelInvoker = Depends(get_invoker)):
    """Analyze a binary given as a data URI."""
    try:
        return await analyze_binary_code(req, invoker)
    except ClarityError as e:
        log.warning("/analyze/binary failed: %s", e)
        raise to_http_error(e) from e

@app.post("/synthesize", response_model=SynthesizeOutput)
async def synthesize(req: SynthesizeInput, invoker: ModelInvoker = Depends(get_invoker)):
    """Synthesize readable code from a previous decompilation."""
    try:
        return await synthesize_readable_code(req, invoker)
    except ClarityError as e:
        log.warning("/synthesize failed: %s", e)
        raise to_http_error(e) from e

@app.post("/analyze", response_model=PerformAnalysisOutput)
async def analyze(req: PerformAnalysisInput, invoker: ModelInvoker = Depends(get_invoker)):
    """Run decompilation and/or binary analysis concurrently.

    A branch that fails while the other succeeds is left null in the response.
    """
    try:
        return await perform_analysis(req, invoker)
    except ClarityError as e:
        log.warning("/analyze failed: %s", e)
        raise to_http_error(e) from e

@app.post("/analyze/upload", response_model=PerformAnalysisOutput)
async def analyze_upload(
    file: UploadFile | None = File(default=None),
    obfuscated_code: str | None = Form(default=None),
    invoker: ModelInvoker = Depends(get_invoker),
):
    """Multipart variant of /analyze: the uploaded file is converted to a data URI here."""
    data_uri = None
    if file is not None:
        b = await file.read()
        max_bytes = get_settings().get("MAX_UPLOAD_BYTES", 0)
        if max_bytes and len(b) > max_bytes:
            raise HTTPException(status_code=413, detail=f"file exceeds {max_bytes} bytes")
        if b:
            hashes = compute_hashes(b)
            log.info("/analyze/upload file=%s size=%d type=%s sha256=%s",
                    file.filename, len(b), sniff_header(b), hashes["sha256"])
            data_uri = to_data_uri(b, filename=file.filename, mime=file.content_type)

    req = PerformAnalysisInput(obfuscated_code=obfuscated_code or None, binary_data_uri=data_uri)
    try:
        return await perform_analysis(req, invoker)
    except ClarityError as e:
        log.warning("/analyze/upload failed: %s", e)
        raise to_http_error(e) from e
