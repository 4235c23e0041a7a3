"""
Game AI: evaluation functions, move search, evaluator networks,
neuro-evolution, players and match orchestration.
"""
