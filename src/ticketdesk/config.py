from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

class AppSettings(BaseSettings):
    name: str = "TicketDesk"
    version: str = "1.0.0"

class BackendSettings(BaseSettings):
    # Web-app endpoint fronting the spreadsheet; empty means "not configured".
    endpoint_url: str = ""
    master_sheet: str = "Master"
    ticket_sheet: str = "Ticket_Enquiry"
    timeout_seconds: Optional[float] = None  # None = wait for the backend

class SheetLayoutSettings(BaseSettings):
    """
    Labels the client relies on inside the backend sheets.
    The header row is located by content, so only the sentinel label is fixed.
    """
    header_sentinel: str = "Timestamp"
    ticket_id_header: str = "Ticket ID"
    id_prefix: str = "TN-"
    id_width: int = 3

class FormSettings(BaseSettings):
    priorities: list[str] = ["high", "medium", "low"]
    success_notice_seconds: float = 3.0

class LoggingSettings(BaseSettings):
    log_requests: bool = True
    level: str = "INFO"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__", env_file=".env", extra="ignore")
    app: AppSettings = AppSettings()
    backend: BackendSettings = BackendSettings()
    layout: SheetLayoutSettings = SheetLayoutSettings()
    form: FormSettings = FormSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        # Load from default path if exists
        default_path = Path("config/settings.yaml")
        path = config_path or (default_path if default_path.exists() else None)

        if not path:
            return cls()

        with open(path, "r") as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

settings = Settings.load()
