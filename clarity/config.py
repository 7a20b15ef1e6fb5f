import os
from pathlib import Path
from dotenv import load_dotenv

ENV_FILE = str((Path(__file__).resolve().parent.parent / ".env").resolve())

def load_env():
    """Load .env once from the project root."""
    load_dotenv(dotenv_path=ENV_FILE, override=True)

def get_settings():
    """Return settings as a simple dictionary."""
    load_env()
    def _int_env(name: str, default: int) -> int:
        val = os.getenv(name, str(default))
        try:
            return int(val)
        except Exception:
            return default

    def _float_env(name: str, default: float) -> float:
        val = os.getenv(name, str(default))
        try:
            return float(val)
        except Exception:
            return default

    return {
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO"),
        "LOG_FILE": os.getenv("LOG_FILE", "logs/clarity.log"),
        "GEMINI_API_KEY": os.getenv("GEMINI_API_KEY", ""),
        "GEMINI_MODEL": os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        "MODEL_TEMPERATURE": _float_env("MODEL_TEMPERATURE", 0.2),
        "DEFAULT_TIMEOUT": _int_env("DEFAULT_TIMEOUT", 60),
        "MAX_UPLOAD_BYTES": _int_env("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
    }
