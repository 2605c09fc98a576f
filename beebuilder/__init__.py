"""
spelling-bee data builder

curates a word list into a versioned dictionary and turns it into a
schedule of daily 7-letter puzzles, then checks both artifacts.
"""

from .config import Config, Policy, ScoringRules, load_policy
from .dictionary import curate
from .scoring import max_score
from .rankings import rank_thresholds
from .candidates import generate_candidates
from .schedule import select_puzzles
from .artifacts import write_dictionary, write_schedule
from .validate import validate_pipeline
from .errors import ConfigurationError, PipelineValidationError

__all__ = [
    "Config",
    "Policy",
    "ScoringRules",
    "load_policy",
    "curate",
    "max_score",
    "rank_thresholds",
    "generate_candidates",
    "select_puzzles",
    "write_dictionary",
    "write_schedule",
    "validate_pipeline",
    "ConfigurationError",
    "PipelineValidationError",
]
