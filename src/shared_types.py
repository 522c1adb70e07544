"""Shared enums and types for sicbo-oracle."""

from enum import IntEnum, StrEnum


class Outcome(StrEnum):
    TAI = "Tài"
    XIU = "Xỉu"
    UNKNOWN = "Không xác định"


class Vote(IntEnum):
    """Predictor vote. Integer values match the upstream service's 0/1/2 codes."""

    NONE = 0
    TAI = 1
    XIU = 2

    @property
    def outcome(self) -> Outcome | None:
        if self is Vote.TAI:
            return Outcome.TAI
        if self is Vote.XIU:
            return Outcome.XIU
        return None


class PredictorName(StrEnum):
    """Predictors whose accuracy is tracked per session."""

    TREND = "trend"
    SHORT = "short"
    MEAN = "mean"
    SWITCH = "switch"
    BRIDGE = "bridge"
