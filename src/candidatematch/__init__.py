"""Candidate evaluation engine for the matchmaking game."""

from __future__ import annotations

__version__ = "0.1.0"
