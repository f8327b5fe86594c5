"""Training engine calculators: loads, set schemes, progressions, phases, enrollment transitions."""

from app.training.load_strategy import parse_load_strategy, round_weight
from app.training.meet_date import compute_phase
from app.training.progression import parse_progression
from app.training.set_scheme import parse_set_scheme

__all__ = ["parse_load_strategy", "round_weight", "compute_phase", "parse_progression", "parse_set_scheme"]
