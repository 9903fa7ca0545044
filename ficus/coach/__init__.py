"""
AI coach module for Ficus.

Handles questions to the trading psychologist model.
"""

from ficus.coach.client import CoachClient, CoachMode, CoachSession, ChatMessage

__all__ = ["CoachClient", "CoachMode", "CoachSession", "ChatMessage"]
