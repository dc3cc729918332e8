"""
Validation Module - Check wants lists against the offer catalog.
"""

from .consistency import ConsistencyChecker, SubmissionSummary, UserStatus
from .orchestrator import TradeValidationOrchestrator, ValidationResult
from .validator import UserValidationResult, UserValidator

__all__ = [
    "ConsistencyChecker",
    "SubmissionSummary",
    "TradeValidationOrchestrator",
    "UserStatus",
    "UserValidationResult",
    "UserValidator",
    "ValidationResult",
]
