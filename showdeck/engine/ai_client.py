"""
AI Client - Unified interface for all AI backends.
Supports: Gemini (structured JSON output), Claude API, DeepSeek Chat, DeepSeek Reasoner.
"""

import logging
from typing import Any, Dict, Optional

import requests
from anthropic import Anthropic

from showdeck.config import config

logger = logging.getLogger(__name__)

MODEL_CHOICES = ['gemini', 'claude', 'deepseek-chat', 'deepseek-reasoner']


def has_credentials(model: str) -> bool:
    """True if the API key for the given backend is configured."""
    if model == 'gemini':
        return bool(config.GEMINI_API_KEY)
    if model == 'claude':
        return bool(config.ANTHROPIC_API_KEY)
    if model in ('deepseek-chat', 'deepseek-reasoner'):
        return bool(config.DEEPSEEK_API_KEY)
    return False


# =============================================================================
# GEMINI CLIENT
# =============================================================================

def call_gemini(
    prompt: str,
    response_schema: Optional[Dict[str, Any]] = None,
    system: Optional[str] = None,
    max_tokens: int = 2000,
) -> str:
    """
    Call Gemini generateContent. Returns generated text.
    With response_schema set, Gemini is asked for application/json constrained to it.
    """
    if not config.GEMINI_API_KEY:
        raise ValueError("GEMINI_API_KEY not set in environment")

    url = f"{config.GEMINI_BASE_URL}/models/{config.GEMINI_MODEL}:generateContent"

    generation_config: Dict[str, Any] = {"maxOutputTokens": max_tokens}
    if response_schema:
        generation_config["responseMimeType"] = "application/json"
        generation_config["responseSchema"] = response_schema

    payload: Dict[str, Any] = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }
    if system:
        payload["systemInstruction"] = {"parts": [{"text": system}]}

    headers = {
        "x-goog-api-key": config.GEMINI_API_KEY,
        "Content-Type": "application/json",
    }

    try:
        logger.debug(f"Calling Gemini API with model {config.GEMINI_MODEL}")
        response = requests.post(
            url, json=payload, headers=headers,
            timeout=(10, config.AI_TIMEOUT_SECONDS), verify=True,
        )
        response.raise_for_status()

        result = response.json()
        parts = result['candidates'][0]['content']['parts']
        return "".join(part.get('text', '') for part in parts)

    except requests.exceptions.RequestException as e:
        logger.error(f"Gemini API error: {e}")
        raise RuntimeError(f"Failed to call Gemini API: {e}")
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.error(f"Gemini response parse error: {e}")
        raise RuntimeError(f"Unexpected Gemini response format: {e}")


# =============================================================================
# CLAUDE CLIENT
# =============================================================================

def call_claude(prompt: str, system: Optional[str] = None, max_tokens: int = 2000) -> str:
    """Call Claude API. Returns generated text."""
    if not config.ANTHROPIC_API_KEY:
        raise ValueError("ANTHROPIC_API_KEY not set in environment")

    client = Anthropic(api_key=config.ANTHROPIC_API_KEY)

    try:
        logger.debug("Calling Claude API")
        message = client.messages.create(
            model=config.CLAUDE_MODEL,
            max_tokens=max_tokens,
            system=system if system else "You are a senior marketing director reviewing an exhibition budget.",
            messages=[
                {"role": "user", "content": prompt}
            ]
        )
        return message.content[0].text

    except Exception as e:
        logger.error(f"Claude API error: {e}")
        raise RuntimeError(f"Failed to call Claude API: {e}")


# =============================================================================
# DEEPSEEK CLIENT
# =============================================================================

def call_deepseek(
    prompt: str,
    model: str = 'deepseek-chat',
    system: Optional[str] = None,
    max_tokens: int = 2000,
    json_mode: bool = False,
) -> str:
    """Call DeepSeek API (OpenAI-compatible). Returns generated text."""
    if not config.DEEPSEEK_API_KEY:
        raise ValueError("DEEPSEEK_API_KEY not set in environment")

    url = f"{config.DEEPSEEK_BASE_URL}/chat/completions"

    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})

    payload: Dict[str, Any] = {
        "model": model,
        "messages": messages,
        "max_tokens": max_tokens,
        "stream": False,
    }
    if json_mode:
        payload["response_format"] = {"type": "json_object"}

    headers = {
        "Authorization": f"Bearer {config.DEEPSEEK_API_KEY}",
        "Content-Type": "application/json",
    }

    try:
        logger.debug(f"Calling DeepSeek API with model {model}")
        response = requests.post(
            url, json=payload, headers=headers,
            timeout=(10, config.AI_TIMEOUT_SECONDS), verify=True,
        )
        response.raise_for_status()

        result = response.json()
        return result['choices'][0]['message']['content']

    except requests.exceptions.RequestException as e:
        logger.error(f"DeepSeek API error: {e}")
        raise RuntimeError(f"Failed to call DeepSeek API: {e}")
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.error(f"DeepSeek response parse error: {e}")
        raise RuntimeError(f"Unexpected DeepSeek response format: {e}")


# =============================================================================
# UNIFIED ROUTER
# =============================================================================

def call_ai(
    prompt: str,
    model: str,
    system: Optional[str] = None,
    max_tokens: int = 2000,
    response_schema: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Route an AI call to the appropriate backend.

    Args:
        prompt: User prompt text
        model: One of 'gemini', 'claude', 'deepseek-chat', 'deepseek-reasoner'
        system: Optional system prompt
        max_tokens: Max tokens to generate
        response_schema: JSON schema for the reply. Gemini enforces it; DeepSeek
            is switched to JSON mode; Claude relies on the prompt.

    Returns: Generated text
    """
    if model == 'gemini':
        return call_gemini(prompt, response_schema=response_schema, system=system, max_tokens=max_tokens)
    elif model == 'claude':
        return call_claude(prompt, system=system, max_tokens=max_tokens)
    elif model in ('deepseek-chat', 'deepseek-reasoner'):
        return call_deepseek(
            prompt, model=model, system=system, max_tokens=max_tokens,
            json_mode=response_schema is not None,
        )
    else:
        raise ValueError(f"Unknown AI model '{model}'. Choose from: {', '.join(MODEL_CHOICES)}")
