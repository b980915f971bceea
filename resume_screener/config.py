"""YAML config loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_DATABASE_URL = "sqlite:///data/resume_screener.db"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EmailConfig:
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    sender_email: str = ""
    sender_password: str = ""  # Gmail App Password
    sender_name: str = "HR Team"
    resend_api_key: str = ""


@dataclass
class LLMConfig:
    provider: str = "openai"  # openai, gemini
    model: str = ""
    api_key: str = ""
    temperature: float = 0.1
    timeout: int = 60


@dataclass
class ScreeningConfig:
    shortlist_threshold: float = 20.0
    max_file_size_mb: int = 10
    ocr_enabled: bool = True

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


@dataclass
class AppConfig:
    email: EmailConfig = field(default_factory=EmailConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    screening: ScreeningConfig = field(default_factory=ScreeningConfig)
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    log_dir: str = "logs"
    session_secret: str = "dev-secret-change-me-in-production"


def normalize_database_url(url: str) -> str:
    # Heroku/Railway hand out postgres:// but SQLAlchemy 2.x requires postgresql://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


def _llm_api_key(provider: str, raw_key: str) -> str:
    env_name = "GEMINI_API_KEY" if provider == "gemini" else "OPENAI_API_KEY"
    return os.environ.get(env_name, raw_key)


def _get(section: dict, key: str, default):
    # A key left blank in YAML loads as None
    value = section.get(key)
    return default if value is None else value


def load_config(config_path: str = "config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.example.yaml to config.yaml and fill in your settings."
        )

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    config = AppConfig()

    # Email
    email_raw = raw.get("email") or {}
    config.email = EmailConfig(
        smtp_server=_get(email_raw, "smtp_server", "smtp.gmail.com"),
        smtp_port=int(_get(email_raw, "smtp_port", 587)),
        sender_email=str(_get(email_raw, "sender_email", "")).strip(),
        sender_password=os.environ.get("SCREENER_EMAIL_PASSWORD", str(_get(email_raw, "sender_password", ""))),
        sender_name=str(_get(email_raw, "sender_name", "HR Team")),
        resend_api_key=os.environ.get("RESEND_API_KEY", str(_get(email_raw, "resend_api_key", ""))),
    )

    # Language model (env vars take precedence for the key)
    llm_raw = raw.get("llm") or {}
    provider = str(_get(llm_raw, "provider", "openai")).lower()
    config.llm = LLMConfig(
        provider=provider,
        model=str(_get(llm_raw, "model", "")),
        api_key=_llm_api_key(provider, str(_get(llm_raw, "api_key", ""))),
        temperature=float(_get(llm_raw, "temperature", 0.1)),
        timeout=int(_get(llm_raw, "timeout", 60)),
    )

    # Screening
    screening_raw = raw.get("screening") or {}
    config.screening = ScreeningConfig(
        shortlist_threshold=float(_get(screening_raw, "shortlist_threshold", 20.0)),
        max_file_size_mb=int(_get(screening_raw, "max_file_size_mb", 10)),
        ocr_enabled=bool(_get(screening_raw, "ocr_enabled", True)),
    )

    config.database_url = normalize_database_url(
        os.environ.get("DATABASE_URL", _get(raw, "database_url", DEFAULT_DATABASE_URL))
    )
    config.log_dir = _get(raw, "log_dir", "logs")
    config.log_level = str(_get(raw, "log_level", "INFO")).upper()
    config.session_secret = os.environ.get(
        "SESSION_SECRET", _get(raw, "session_secret", config.session_secret)
    )

    return config


def validate_config(config: AppConfig) -> list[str]:
    """Return list of validation warnings (empty = OK)."""
    warnings = []

    if config.llm.provider not in ("openai", "gemini"):
        warnings.append(f"Unknown LLM provider '{config.llm.provider}' (supported: openai, gemini)")

    if not config.llm.api_key:
        warnings.append("No LLM API key configured - resume screening will fail")

    if not config.email.sender_email:
        warnings.append("Sender email not configured - candidate notifications will be skipped")
    elif not config.email.sender_password and not config.email.resend_api_key:
        warnings.append("Email credentials not configured - candidate notifications will be skipped")

    if not 0.0 <= config.screening.shortlist_threshold <= 100.0:
        warnings.append("Shortlist threshold should be a percentage between 0 and 100")

    if config.log_level not in LOG_LEVELS:
        warnings.append(f"Unknown log level '{config.log_level}' - falling back to INFO")

    if config.session_secret == AppConfig.session_secret:
        warnings.append("Using the default session secret - set SESSION_SECRET in production")

    return warnings
