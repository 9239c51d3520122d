"""Spla Roulette - random rule, stage, weapon and team draws for a group of players.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
