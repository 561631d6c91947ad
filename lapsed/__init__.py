"""
Lapsed - find and prune contacts you have not talked to in a while.

File: __init__.py
Author: Aidan Allchin
Created: 2026-01-04
Last Modified: 2026-01-11
"""

from .config import LapsedConfig
from .deletion import DeletionCoordinator, DeletionState
from .models import ClassifiedContact, Contact, DeletionOutcome, DeletionSummary, InteractionRecord
from .pipeline import PipelineRunner, StalenessPipeline, run_pipeline

__all__ = [
    "LapsedConfig",
    "DeletionCoordinator",
    "DeletionState",
    "ClassifiedContact",
    "Contact",
    "DeletionOutcome",
    "DeletionSummary",
    "InteractionRecord",
    "PipelineRunner",
    "StalenessPipeline",
    "run_pipeline",
]
