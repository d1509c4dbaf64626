"""
Engine exceptions.

Ordinary gameplay misuse (acting out of turn, bidding while discarding, ...)
never raises: those calls are ignored. Only broken internal invariants do.
"""
from __future__ import annotations


class MusEngineError(Exception):
    """Base class for engine errors."""


class InvariantViolation(MusEngineError):
    """The engine reached a state its own rules forbid (an engine bug)."""


class HandSizeError(InvariantViolation):
    """A hand with no cards, or more than four, reached the evaluator."""
