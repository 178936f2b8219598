from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# Load .env file if it exists, for local development
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONTENT_PATH = str(PROJECT_ROOT / "assets" / "wrap_content.yml")

class WrapSettings(BaseSettings):
    content_path: str = DEFAULT_CONTENT_PATH
    log_level: str = "INFO"
    log_json: bool = False
    share_url: str = "https://student-kickoff-wrap.app"
    card_font_path: Optional[str] = None  # A TrueType font with emoji coverage, if available
    card_output_path: str = "my-semester-wrap.png"

    model_config = SettingsConfigDict(env_prefix='WRAP_')

def get_settings() -> WrapSettings:
    # Re-read on every call so environment overrides in tests take effect
    return WrapSettings()

if __name__ == "__main__":
    settings = get_settings()
    print("Student Kickoff Wrap Configuration:")
    print(f"  Content path: {settings.content_path}")
    print(f"  Log level: {settings.log_level} (json={settings.log_json})")
    print(f"  Share URL: {settings.share_url}")
    print(f"  Card font: {settings.card_font_path or '<default>'}")
    print(f"  Card output: {settings.card_output_path}")
    print("\nTo override, set environment variables like WRAP_CONTENT_PATH, WRAP_LOG_LEVEL, WRAP_SHARE_URL.")
