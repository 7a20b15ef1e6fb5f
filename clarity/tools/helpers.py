from __future__ import annotations
import base64, hashlib, json, logging, mimetypes
from typing import Any, Dict, Optional

log = logging.getLogger("tools.helpers")

DEFAULT_MIME = "application/octet-stream"

def guess_mime(filename: Optional[str]) -> str:
    if not filename:
        return DEFAULT_MIME
    mime, _ = mimetypes.guess_type(filename)
    return mime or DEFAULT_MIME

def to_data_uri(data: bytes, filename: Optional[str] = None, mime: Optional[str] = None) -> str:
    """
    Encode raw bytes as `data:<mime>;base64,<payload>`.
    MIME comes from `mime`, then the file name, then falls back to octet-stream.
    """
    mt = (mime or "").strip() or guess_mime(filename)
    payload = base64.b64encode(data or b"").decode("ascii")
    return f"data:{mt};base64,{payload}"

def compute_hashes(buf: bytes) -> Dict[str, str]:
    return {
        "md5": hashlib.md5(buf).hexdigest(),
        "sha1": hashlib.sha1(buf).hexdigest(),
        "sha256": hashlib.sha256(buf).hexdigest(),
    }

def sniff_header(data: bytes) -> str:
    if len(data) >= 2 and data[:2] == b"MZ":
        return "PE"
    if len(data) >= 4 and data[:4] == b"\x7fELF":
        return "ELF"
    if len(data) >= 4 and data[:4] in (b"\xfe\xed\xfa\xce", b"\xfe\xed\xfa\xcf", b"\xce\xfa\xed\xfe", b"\xcf\xfa\xed\xfe"):
        return "Mach-O"
    return "Unknown"

def strip_code_fences(s: str) -> str:
    s = s.strip()
    if s.startswith("```"):
        nl = s.find("\n")
        s = s[nl+1:] if nl != -1 else s[3:]
    if s.endswith("```"):
        s = s[:-3]
    return s.strip()

def message_text(content: Any) -> str:
    """Flatten a chat message `content` (str or list of parts) into plain text."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for p in content:
            if isinstance(p, str):
                parts.append(p)
            elif isinstance(p, dict) and p.get("type", "text") == "text":
                parts.append(str(p.get("text", "")))
        return "".join(parts)
    return str(content)

def parse_model_json(text: str) -> Optional[Dict[str, Any]]:
    """Parse a model reply as a JSON object; None when it is empty or not an object."""
    body = strip_code_fences(text or "")
    if not body:
        return None
    try:
        out = json.loads(body)
    except json.JSONDecodeError:
        start, end = body.find("{"), body.rfind("}")
        if start == -1 or end <= start:
            log.debug("parse_model_json: no JSON object found")
            return None
        try:
            out = json.loads(body[start:end + 1])
        except json.JSONDecodeError:
            log.debug("parse_model_json: could not parse JSON")
            return None
    return out if isinstance(out, dict) else None
