"""
Ficus - Personal Trading Discipline Journal

A local, license-gated journal for pre-trade discipline,
trade logging, reflection and an AI trading coach.

This system exists to slow the trader down, not speed them up.
"""

__version__ = "0.1.0"
