"""Link matching and guard evaluation for cascade propagation."""

from statecascade.evaluation.guard import evaluate_guard
from statecascade.evaluation.matcher import match_link

__all__ = ["evaluate_guard", "match_link"]
