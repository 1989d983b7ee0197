"""Tactics detection and battle-point economy for a dueling chess variant."""
