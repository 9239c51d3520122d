"""Services Layer - imperative shell around the pure core.

Invariants:
    - Services own all store and network access; core stays pure
    - RouletteController is the single entry point for user intents
"""
