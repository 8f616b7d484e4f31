"""Exceptions raised by the scoring and standings engine."""

from enum import Enum


class PadelTourException(Exception):
    """Base exception for all padeltour errors."""

    pass


class InvalidResultReason(str, Enum):
    """Why a submitted score was rejected."""

    NON_INTEGER_SCORE = "non_integer_score"
    NEGATIVE_SCORE = "negative_score"
    DISALLOWED_TIE = "disallowed_tie"


class InvalidResult(PadelTourException):
    """Raised when a submitted score is malformed or not allowed.

    This is always the submitter's fault; callers surface it and never retry.
    """

    def __init__(self, reason: InvalidResultReason, message: str = ""):
        self.reason = reason
        super().__init__(message or reason.value)


class StatsUnderflow(PadelTourException):
    """Raised when an update would drive a statistics counter below zero.

    This usually means a match was reversed twice, or reversed without ever
    being applied.
    """

    def __init__(self, player_id: str, field: str, value: int):
        self.player_id = player_id
        self.field = field
        self.value = value
        super().__init__(
            f"Stats for player {player_id} would underflow: {field}={value}"
        )
