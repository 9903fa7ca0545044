"""
AI trading coach.

Thin client for the Gemini generateContent endpoint. Failures
never reach the trader: they get a calm localized fallback.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import requests

from ficus.core.config import Config, Language
from ficus.core.i18n import get_translations

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

TEMPERATURE = 0.8
THINKING_BUDGET = 15000

SYSTEM_INSTRUCTION = """You are the "Ficus Trading Psychologist". Your role is to guide traders through their emotional ups and downs.
Focus on:
1. Trading Discipline (Risk management, sticking to plans).
2. Emotion Control (Dealing with FOMO, Revenge Trading, Greed).
3. Rule Enforcement: Remind them of rules used by legendary traders like Mark Minervini, Paul Tudor Jones, and Jesse Livermore.
Respond in the language the user is using (Marathi, Hindi, or English).
Keep your responses empathetic, firm about rules, and highly professional.
If they mention a loss, analyze their psychology and suggest ways to regain discipline."""


class CoachMode(str, Enum):
    """Model tier for a coach request."""
    FAST = "fast"
    THINKING = "thinking"


@dataclass
class ChatMessage:
    role: str  # 'user' or 'model'
    text: str


class CoachClient:
    """
    Gemini client for the trading coach.

    One request per question, no retries.
    """

    def __init__(self, config: Config):
        self.config = config
        self.api_key = config.gemini_api_key
        self.timeout = config.coach_timeout

    def _build_payload(self, prompt: str, mode: CoachMode) -> dict:
        generation_config = {"temperature": TEMPERATURE}
        if mode == CoachMode.THINKING:
            generation_config["thinkingConfig"] = {"thinkingBudget": THINKING_BUDGET}

        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

    @staticmethod
    def _parse_text(data: dict) -> str:
        """
        Join the text parts of the first candidate.

        Thought summaries are skipped.
        """
        parts = data["candidates"][0]["content"].get("parts", [])
        return "".join(
            part.get("text", "") for part in parts if not part.get("thought")
        ).strip()

    def ask(
        self,
        prompt: str,
        language: Language = Language.MARATHI,
        mode: CoachMode = CoachMode.FAST,
    ) -> str:
        """
        Ask the coach a question.

        Returns the model's answer, or the fallback message for
        language on any failure.
        """
        mode = CoachMode(mode)
        fallback = get_translations(language).coach_fallback

        if not self.api_key:
            logger.warning("Gemini API key not configured, using fallback reply")
            return fallback

        model = (
            self.config.coach_thinking_model
            if mode == CoachMode.THINKING
            else self.config.coach_fast_model
        )

        try:
            response = requests.post(
                GEMINI_API_URL.format(model=model),
                headers={
                    "x-goog-api-key": self.api_key,
                    "Content-Type": "application/json",
                },
                json=self._build_payload(prompt, mode),
                timeout=self.timeout,
            )
            response.raise_for_status()

            text = self._parse_text(response.json())
            if not text:
                raise ValueError("Empty response from AI")

            logger.info(f"Coach replied via {model} ({len(text)} chars)")
            return text

        except requests.RequestException as e:
            logger.error(f"AI Coach request failed: {e}")
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"AI Coach error: {e}")

        return fallback


@dataclass
class CoachSession:
    """Chat history with the coach for one sitting."""

    client: CoachClient
    language: Language = Language.MARATHI
    mode: CoachMode = CoachMode.FAST
    history: List[ChatMessage] = field(default_factory=list)

    def __post_init__(self):
        if not self.history:
            self.history.append(ChatMessage("model", get_translations(self.language).zen_intro))

    def send(self, text: str) -> Optional[str]:
        """
        Send a message and record both sides.

        Blank input is ignored and returns None.
        """
        message = (text or "").strip()
        if not message:
            return None

        self.history.append(ChatMessage("user", message))
        reply = self.client.ask(message, self.language, self.mode)
        self.history.append(ChatMessage("model", reply))
        return reply
