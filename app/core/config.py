import os
from typing import List, Optional

from pydantic import BaseModel


DEFAULT_PROJECT_ID = "leadership-meeting-reflection-app-2c3hahsk"


class AppConfig(BaseModel):
    project_id: str = DEFAULT_PROJECT_ID
    store_backend: str = "memory"
    store_path: str = "data/reflection_store.json"
    mail_driver: str = "console"
    smtp_host: Optional[str] = None
    smtp_port: Optional[int] = None
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    sendgrid_api_key: Optional[str] = None
    default_sender: str = "briefings@meeting-reflection.app"
    include_plaintext: bool = True
    timezone: str = "America/New_York"
    calendar_provider: str = "mock"
    seed_default_templates: bool = True
    cors_origins: List[str] = ["*"]


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def load_config() -> AppConfig:
    smtp_port_str = os.getenv("SMTP_PORT")
    smtp_port = int(smtp_port_str) if smtp_port_str and smtp_port_str.isdigit() else None
    origins_raw = os.getenv("CORS_ORIGINS", "*")
    origins = [o.strip() for o in origins_raw.split(",") if o.strip()] or ["*"]
    return AppConfig(
        project_id=os.getenv("BACKEND_PROJECT_ID", DEFAULT_PROJECT_ID),
        store_backend=os.getenv("STORE_BACKEND", "memory").lower(),
        store_path=os.getenv("STORE_PATH", "data/reflection_store.json"),
        mail_driver=os.getenv("MAIL_DRIVER", "console").lower(),
        smtp_host=os.getenv("SMTP_HOST"),
        smtp_port=smtp_port,
        smtp_username=os.getenv("SMTP_USERNAME"),
        smtp_password=os.getenv("SMTP_PASSWORD"),
        smtp_use_tls=_env_flag("SMTP_USE_TLS", "true"),
        sendgrid_api_key=os.getenv("SENDGRID_API_KEY"),
        default_sender=os.getenv("DEFAULT_SENDER", "briefings@meeting-reflection.app"),
        include_plaintext=_env_flag("INCLUDE_PLAINTEXT", "true"),
        timezone=os.getenv("TIMEZONE", "America/New_York"),
        calendar_provider=os.getenv("CALENDAR_PROVIDER", "mock").lower(),
        seed_default_templates=_env_flag("SEED_DEFAULT_TEMPLATES", "true"),
        cors_origins=origins,
    )
