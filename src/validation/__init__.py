"""Entry validation package."""

from src.validation.validator import ProblemValidator

__all__ = ["ProblemValidator"]
