"""ATS scoring result models."""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field


class CheckCategory(str, Enum):
    """Rubric categories."""
    FORMATTING = "formatting"
    CONTENT = "content"
    KEYWORDS = "keywords"
    STRUCTURE = "structure"


class Grade(str, Enum):
    """Letter grades, best first."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class ATSCheck(BaseModel):
    """Outcome of one rubric criterion."""
    id: str
    name: str
    category: CheckCategory
    score: float
    max_score: float
    passed: bool
    description: str
    feedback: str
    suggestions: Tuple[str, ...] = Field(default_factory=tuple)

    class Config:
        frozen = True

    @property
    def ratio(self) -> float:
        return self.score / self.max_score if self.max_score else 0.0


class ATSScoreResult(BaseModel):
    """Aggregate ATS score for one résumé."""
    overall_score: float
    max_score: float
    percentage: int
    grade: Grade
    summary: str
    top_issues: Tuple[str, ...] = Field(default_factory=tuple)
    checks: Tuple[ATSCheck, ...] = Field(default_factory=tuple)

    class Config:
        frozen = True

    def check(self, check_id: str) -> Optional[ATSCheck]:
        """Look up a check by id."""
        for item in self.checks:
            if item.id == check_id:
                return item
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for display layers."""
        return self.model_dump(mode="json")
