import json
from typing import Optional, Dict, Any, List, Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    # Audit store
    database_url: str = "sqlite:///./signature_engine.db"

    # Public URL the signed files are served under
    base_url: str = "http://localhost:5001"
    signed_url_prefix: str = "/signed"

    # Source documents
    documents_dir: str = "pdfs"
    # documentId -> file name under documents_dir. DOCUMENTS env var takes JSON
    # or "id=file,id=file"; NoDecode keeps pydantic-settings from json.loads-ing it.
    documents: Annotated[Dict[str, str], NoDecode] = {"sample": "sample.pdf"}

    # Output
    signed_dir: str = "signed"
    delete_orphaned_output: bool = True  # Remove the output file when the audit write fails

    # Signature image limits
    max_signature_bytes: int = 5 * 1024 * 1024
    max_signature_pixels: int = 4_000_000

    # CORS
    frontend_url: str = "http://localhost:5173"
    cors_allow_all: bool = True

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("documents", mode="before")
    @classmethod
    def parse_documents(cls, value: Any) -> Dict[str, str]:
        """Accept a dict, a JSON object string, or ``id=file,id=file``."""
        if isinstance(value, dict):
            return value
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return {}
            if raw.startswith("{"):
                try:
                    parsed = json.loads(raw)
                    if isinstance(parsed, dict):
                        return {str(k): str(v) for k, v in parsed.items()}
                except json.JSONDecodeError:
                    pass
            documents: Dict[str, str] = {}
            for item in raw.strip("{}").split(","):
                if "=" not in item:
                    continue
                key, file_name = item.split("=", 1)
                if key.strip() and file_name.strip():
                    documents[key.strip()] = file_name.strip()
            return documents
        return value

    def cors_origins(self) -> List[str]:
        if self.cors_allow_all:
            return ["*"]
        return [self.frontend_url]

    def signed_url_for(self, file_name: str) -> str:
        """Relative location of a signed file under the static mount."""
        return f"{self.signed_url_prefix.rstrip('/')}/{file_name}"

    def public_url_for(self, relative_path: str) -> str:
        return f"{self.base_url.rstrip('/')}{relative_path}"

    def document_file_name(self, document_id: str) -> Optional[str]:
        return self.documents.get(document_id)


def get_settings() -> Settings:
    return Settings()
