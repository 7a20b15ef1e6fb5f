import streamlit as st
import requests
from pathlib import Path
import os, json, hashlib
from typing import Any, Dict, Optional
import pandas as pd

st.set_page_config(page_title="Clarity", page_icon="🧬", layout="wide")

st.title("🧬 Exit Music for a Decompiler")
st.caption("Neural Decompiler & Binary Analysis Tool")

st.markdown(
    """
    <style>
      .badge{display:inline-block;padding:2px 8px;border-radius:999px;
        border:1px solid rgba(255,255,255,.15);background:rgba(255,255,255,.06);
        margin-right:6px;font-weight:600;font-size:.8rem}
      .card{background:rgba(255,255,255,.04);border:1px solid rgba(255,255,255,.08);
        padding:10px 14px;border-radius:10px}
      .label{opacity:.7;font-size:.85rem}
    </style>
    """,
    unsafe_allow_html=True,
)

API_BASE_DEFAULT = os.getenv("API_BASE", "http://clarity_api:8000")
api_base = API_BASE_DEFAULT

for key in ("analysis", "analysis_error", "attempted", "synthesis", "synthesis_error"):
    st.session_state.setdefault(key, None)

def _human_size(n: int) -> str:
    s = float(n)
    for u in ("B", "KB", "MB", "GB", "TB"):
        if s < 1024 or u == "TB":
            return f"{int(s)} {u}" if u == "B" else f"{s:.1f} {u}"
        s /= 1024.0

def _error_detail(r: requests.Response) -> str:
    try:
        detail = r.json().get("detail")
    except Exception:
        detail = None
    if isinstance(detail, str) and detail:
        return detail
    return f"HTTP Error: {r.status_code} {r.text[:500]}"

def _post(path: str, **kwargs) -> Dict[str, Any]:
    """POST to the API and return the JSON body; raises RuntimeError with a readable message."""
    try:
        r = requests.post(f"{api_base}{path}", **kwargs)
    except requests.RequestException as e:
        raise RuntimeError(f"Failure calling the API: {e}")
    if r.status_code != 200:
        raise RuntimeError(_error_detail(r))
    try:
        return r.json()
    except ValueError:
        raise RuntimeError("Answer was not a JSON")

def bullet_list(values, empty: str) -> None:
    vals = values or []
    if vals:
        st.dataframe(pd.DataFrame({"finding": [str(v) for v in vals]}), width='stretch', hide_index=True)
    else:
        st.markdown(f"_{empty}_")

left, right = st.columns([35, 65], gap="large")

with left:
    st.subheader("🔬 Analysis Input")
    code = st.text_area("Obfuscated code (optional):", height=260, placeholder="Paste obfuscated source here...")
    file = st.file_uploader(
        "Upload binary file (optional):",
        type=None,
        help=".exe, .dll, .bin, .so, .dylib ...",
    )

    if file is not None:
        b = file.getvalue()
        st.markdown(
            f"""
            <div class="card">
              <div style="font-weight:700;font-size:1.0rem">{file.name}</div>
              <span class="badge">Size: {_human_size(len(b))}</span>
              <span class="badge">Ext: {Path(file.name).suffix or '—'}</span>
              <div class="label" style="margin-top:6px">SHA256</div>
              <code>{hashlib.sha256(b).hexdigest()}</code>
            </div>
            """,
            unsafe_allow_html=True,
        )

    has_input = bool(code.strip()) or file is not None
    if st.button("Analyze", disabled=not has_input, type="primary"):
        if not has_input:
            st.warning("Provide obfuscated code or a binary file first!")
        else:
            files = {"file": (file.name, file.getvalue(), file.type or "application/octet-stream")} if file else None
            data = {"obfuscated_code": code} if code.strip() else {}
            st.session_state["analysis"] = None
            st.session_state["analysis_error"] = None
            st.session_state["synthesis"] = None
            st.session_state["synthesis_error"] = None
            st.session_state["attempted"] = {"decompile": bool(code.strip()), "binary": file is not None}
            try:
                with st.spinner("Analyzing..."):
                    st.session_state["analysis"] = _post("/analyze/upload", files=files, data=data)
                st.success("Analysis Finished!")
            except RuntimeError as e:
                st.session_state["analysis_error"] = str(e)

    if st.session_state["analysis_error"]:
        st.error(st.session_state["analysis_error"])

result: Dict[str, Any] = st.session_state["analysis"] or {}
attempted: Dict[str, bool] = st.session_state["attempted"] or {}
decomp: Optional[Dict[str, Any]] = result.get("decompilationResult")
binary: Optional[Dict[str, Any]] = result.get("binaryAnalysisResult")

with right:
    if result:
        st.download_button(
            "⬇️ Download JSON",
            data=json.dumps(result, indent=2, ensure_ascii=False).encode("utf-8"),
            file_name="analysis.json",
            mime="application/json",
            width='stretch',
        )
        if attempted.get("decompile") and decomp is None:
            st.warning("Decompilation produced no result; showing the binary report only.")
        if attempted.get("binary") and binary is None:
            st.warning("Binary analysis produced no result; showing the decompilation only.")

    tab1, tab2, tab3, tab4, tab5, tab6 = st.tabs(
        ["Decompiled Code", "Analysis Report", "Potential Threats", "Readable Code", "Binary Report", "JSON"]
    )

    with tab1:
        if decomp:
            st.code(decomp.get("decompiledCode", ""), language=None)
        else:
            st.markdown("_Decompiled code will appear here._")

    with tab2:
        if decomp:
            st.write(decomp.get("analysisReport") or "No report provided.")
        else:
            st.markdown("_The analysis report will appear here._")

    with tab3:
        if decomp:
            st.write(decomp.get("potentialThreats") or "No threats identified.")
        else:
            st.markdown("_Potential threats will appear here._")

    with tab4:
        if st.button("Synthesize readable code", disabled=decomp is None):
            st.session_state["synthesis"] = None
            st.session_state["synthesis_error"] = None
            try:
                with st.spinner("Synthesizing..."):
                    st.session_state["synthesis"] = _post(
                        "/synthesize", json={"decompiledCode": decomp.get("decompiledCode", "")}
                    )
            except RuntimeError as e:
                st.session_state["synthesis_error"] = str(e)
        synth = st.session_state["synthesis"] or {}
        if st.session_state["synthesis_error"]:
            st.error(st.session_state["synthesis_error"])
        elif synth:
            st.code(synth.get("readableCode", ""), language=None)
        else:
            st.markdown("_Run a decompilation first, then synthesize readable code._")

    with tab5:
        if binary:
            st.subheader("🛡️ Identified Vulnerabilities")
            bullet_list(binary.get("vulnerabilities"), "No vulnerabilities identified.")
            st.subheader("☠️ Malicious Behavior")
            bullet_list(binary.get("maliciousBehavior"), "No malicious behavior identified.")
            st.subheader("📄 Analysis Summary")
            st.write(binary.get("summary") or "No summary provided.")
        else:
            st.markdown("_Upload a binary file to see its analysis._")

    with tab6:
        st.json(result)
