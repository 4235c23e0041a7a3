"""
Training infrastructure for the evaluator.

This module provides:
- Evaluator persistence (gzip-compressed JSON)
- Checkpoint management for resumable training
- Training orchestration with logging

Example usage:
    from gomoku.ai.training import EvolutionTrainer, quick_train
    from gomoku.ai.evolution import EvolutionConfig

    result = quick_train(generations=2)

    trainer = EvolutionTrainer(EvolutionConfig(generations=10))
    result = trainer.train()
"""
from .checkpoints import (
    EvaluatorFormatError,
    evaluator_to_dict,
    evaluator_from_dict,
    serialize_evaluator,
    deserialize_evaluator,
    save_evaluator,
    load_evaluator,
    CheckpointManager,
    TrainingLogger,
)
from .trainer import EvolutionTrainer, TrainingResult, quick_train

__all__ = [
    # Persistence
    'EvaluatorFormatError',
    'evaluator_to_dict',
    'evaluator_from_dict',
    'serialize_evaluator',
    'deserialize_evaluator',
    'save_evaluator',
    'load_evaluator',

    # Checkpoints
    'CheckpointManager',
    'TrainingLogger',

    # Orchestration
    'EvolutionTrainer',
    'TrainingResult',
    'quick_train',
]
