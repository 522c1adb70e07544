"""Display-only values for the public endpoint.

None of these affect the prediction; the score range and percentage are
drawn independently of the ensemble confidence.
"""

import random
from typing import Optional

from shared_types import Outcome

SESSION_DIGITS = 7


def random_score_range(outcome: Outcome, rng: Optional[random.Random] = None, count: int = 3) -> str:
    """Comma-joined plausible totals: 11-16 for Tài, 5-10 for Xỉu."""
    rng = rng or random.Random()
    if outcome == Outcome.TAI:
        low = 11
    elif outcome == Outcome.XIU:
        low = 5
    else:
        return ""
    return ",".join(str(rng.randint(low, low + 5)) for _ in range(count))


def random_confidence_pct(rng: Optional[random.Random] = None) -> str:
    """Whole-number percentage between 50 and 100, as a string."""
    rng = rng or random.Random()
    return f"{(rng.random() * 0.5 + 0.5) * 100:.0f}"


def next_session_id(session: str) -> str:
    """'#0012345' -> '#0012346'."""
    number = int(session.lstrip("#")) + 1
    return f"#{number:0{SESSION_DIGITS}d}"
