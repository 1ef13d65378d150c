"""Groq chat-completion calls shared by the recommendation and guide services."""

import json
import os
import re
from pathlib import Path

from groq import Groq

MODEL = os.environ.get("GROQ_MODEL", "llama-3.3-70b-versatile")  # Exported for audit logging

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"


def load_prompt(name: str) -> str:
    return (PROMPTS_DIR / f"{name}.txt").read_text(encoding="utf-8")


def get_api_key(api_key: str | None = None) -> str:
    return (api_key or "").strip() or os.environ.get("GROQ_API_KEY", "").strip()


def parse_json_response(content: str) -> dict:
    """Parse model output as JSON, tolerating markdown code fences and surrounding prose."""
    text = content.strip()
    text = re.sub(r"```(?:json)?\n?", "", text)
    match = re.search(r"\{[\s\S]*\}", text)
    if not match:
        raise ValueError("No JSON object found in model response")
    return json.loads(match.group(0))


def call_groq(
    api_key: str,
    system_prompt: str,
    user_text: str,
    *,
    temperature: float = 0.85,
    top_p: float = 0.95,
    max_tokens: int = 2500,
    json_mode: bool = True,
) -> dict:
    """Single chat completion; returns the parsed JSON body."""
    client = Groq(api_key=api_key)
    messages = [
        {"role": "system", "content": system_prompt + (" Return strictly valid JSON." if json_mode else "")},
        {"role": "user", "content": user_text},
    ]
    kwargs = {
        "model": MODEL,
        "messages": messages,
        "temperature": temperature,
        "top_p": top_p,
        "max_tokens": max_tokens,
    }
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    response = client.chat.completions.create(**kwargs)
    content = response.choices[0].message.content or ""
    return parse_json_response(content)
