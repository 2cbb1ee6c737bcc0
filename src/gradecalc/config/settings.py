from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    app_title: str = os.getenv("GRADECALC_TITLE", "Grade Calculator")
    web_mode: bool = os.getenv("GRADECALC_WEB", "0") == "1"
    port: int = int(os.getenv("PORT", "8550"))
    log_level: str = os.getenv("GRADECALC_LOG_LEVEL", "INFO").upper()


settings = Settings()
