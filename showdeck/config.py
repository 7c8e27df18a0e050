"""
Showdeck Configuration
Loads settings from environment variables with sensible defaults.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

_logger = logging.getLogger(__name__)

# Load .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)


class Config:
    """Application configuration. Nothing here is mandatory."""

    # Which backend writes the executive summary: gemini / claude / deepseek-chat / deepseek-reasoner
    SUMMARY_MODEL = os.getenv('SUMMARY_MODEL', 'gemini')

    # Gemini (default summary backend). API_KEY accepted as a fallback name.
    GEMINI_API_KEY = os.getenv('GEMINI_API_KEY') or os.getenv('API_KEY', '')
    GEMINI_BASE_URL = os.getenv('GEMINI_BASE_URL', 'https://generativelanguage.googleapis.com/v1beta')
    GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.5-flash')

    # Claude
    ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY', '')
    CLAUDE_MODEL = os.getenv('CLAUDE_MODEL', 'claude-3-5-sonnet-20241022')

    # DeepSeek (OpenAI-compatible)
    DEEPSEEK_API_KEY = os.getenv('DEEPSEEK_API_KEY', '')
    DEEPSEEK_BASE_URL = os.getenv('DEEPSEEK_BASE_URL', 'https://api.deepseek.com')

    # Read timeout for any AI call (seconds)
    AI_TIMEOUT_SECONDS = float(os.getenv('AI_TIMEOUT_SECONDS', '120'))

    if not (GEMINI_API_KEY or ANTHROPIC_API_KEY or DEEPSEEK_API_KEY):
        _logger.info("No AI credentials configured; executive summaries will use the offline fallback.")


# Singleton instance
config = Config()
