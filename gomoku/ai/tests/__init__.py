"""
Tests for the AI package.

This package contains tests for:
- Board encoding
- Evaluator network infrastructure
- Move search
- Chromosome operators and the evolutionary trainer
- Player implementations and the match runner
- Evaluator persistence and the command line
"""
