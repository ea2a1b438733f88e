"""Configuration from environment variables (.env)."""

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    project_root: Path
    logs_dir: Path
    api_base_url: str
    job_search_path: str
    job_quote_path: str
    people_search_path: str
    people_quote_path: str
    http_timeout_seconds: float
    log_level: str

    @classmethod
    def load(cls) -> "Config":
        project_root = Path(__file__).parent.parent.parent
        return cls(
            project_root=project_root,
            logs_dir=Path(os.getenv("INTROLINK_LOGS_DIR", str(project_root / "logs"))),
            api_base_url=os.getenv("INTROLINK_API_URL", "http://localhost:3001").rstrip("/"),
            job_search_path=os.getenv("JOB_SEARCH_PATH", "/api/job-finder/search"),
            job_quote_path=os.getenv("JOB_QUOTE_PATH", "/api/job-finder/quote"),
            people_search_path=os.getenv("PEOPLE_SEARCH_PATH", "/api/people-finder/search"),
            people_quote_path=os.getenv("PEOPLE_QUOTE_PATH", "/api/people-finder/quote"),
            http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "60")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list[str]:
        errors = []
        parsed = urlparse(self.api_base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(f"INTROLINK_API_URL must be an http(s) URL: {self.api_base_url!r}")
        if self.http_timeout_seconds <= 0:
            errors.append(f"HTTP_TIMEOUT_SECONDS must be positive, got {self.http_timeout_seconds}")
        for name in ("job_search_path", "job_quote_path", "people_search_path", "people_quote_path"):
            if not getattr(self, name).startswith("/"):
                errors.append(f"{name.upper()} must start with '/'")
        return errors


config = Config.load()
