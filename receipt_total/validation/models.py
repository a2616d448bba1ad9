from dataclasses import dataclass
from enum import Enum


class SubmissionType(str, Enum):
    """Kind of document submitted for analysis."""

    STATEMENT = "STATEMENT"
    PAYMENT = "PAYMENT"


@dataclass(frozen=True)
class AnalysisRequest:
    """Validated body of a total-amount request."""

    document_path: str
    submission_type: SubmissionType
