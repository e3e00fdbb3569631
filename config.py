"""Configuration management for the translation pipeline."""
import os
from dataclasses import dataclass


@dataclass
class Config:
    """Configuration loaded from environment variables."""

    # Oracle (OpenAI-compatible chat completion endpoint, Groq by default)
    oracle_url: str = "https://api.groq.com/openai/v1"
    oracle_model: str = "llama-3.3-70b-versatile"
    oracle_api_key: str = ""
    oracle_timeout: float = 300.0
    oracle_temperature: float = 0.1

    # Translation settings
    batch_size: int = 50
    default_target_language: str = "Turkish"

    # PDF output
    pdf_font_name: str = "Helvetica"  # Standard Type 1 font, no embedding needed
    pdf_font_size: float = 12.0
    pdf_margin: float = 50.0

    # Job tracking
    job_retention_seconds: float = 3600.0

    # File paths
    upload_dir: str = "./uploads"
    error_log_path: str = "./error.log"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            oracle_url=os.getenv("ORACLE_URL", "https://api.groq.com/openai/v1"),
            oracle_model=os.getenv("ORACLE_MODEL", "llama-3.3-70b-versatile"),
            oracle_api_key=os.getenv("GROQ_API_KEY", ""),
            oracle_timeout=float(os.getenv("ORACLE_TIMEOUT", "300")),
            oracle_temperature=float(os.getenv("ORACLE_TEMPERATURE", "0.1")),
            batch_size=int(os.getenv("BATCH_SIZE", "50")),
            default_target_language=os.getenv("DEFAULT_TARGET_LANGUAGE", "Turkish"),
            pdf_font_name=os.getenv("PDF_FONT_NAME", "Helvetica"),
            pdf_font_size=float(os.getenv("PDF_FONT_SIZE", "12")),
            pdf_margin=float(os.getenv("PDF_MARGIN", "50")),
            job_retention_seconds=float(os.getenv("JOB_RETENTION_SECONDS", "3600")),
            upload_dir=os.getenv("UPLOAD_DIR", "./uploads"),
            error_log_path=os.getenv("ERROR_LOG_PATH", "./error.log"),
        )

    def ensure_directories(self) -> None:
        """Create the upload directory and the error log's parent if they don't exist."""
        os.makedirs(self.upload_dir, exist_ok=True)
        log_dir = os.path.dirname(os.path.abspath(self.error_log_path))
        os.makedirs(log_dir, exist_ok=True)
