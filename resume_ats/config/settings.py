"""
Configuration settings management with environment variable support.

Every threshold used by ingestion, parsing and scoring is a named setting
here rather than a literal in the services.
"""

import json
from functools import lru_cache
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv


# Load environment variables
load_dotenv()


class IngestionSettings(BaseModel):
    """Document ingestion limits."""
    max_document_bytes: int = 10 * 1024 * 1024
    max_pages: int = 20
    min_text_chars: int = 20
    # Vertical gap, in multiples of the median line height, that counts as a paragraph break
    paragraph_gap_ratio: float = 0.8


class ParserSettings(BaseModel):
    """Structural parser heuristics."""
    header_window: int = 8
    max_header_tokens: int = 4
    max_name_tokens: int = 4
    require_bold_headers: bool = False
    max_entry_header_chars: int = 100
    max_skill_chars: int = 50
    max_skills: int = 50


class GradeThresholds(BaseModel):
    """Lower percentage bound for each passing grade; anything below D is F."""
    A: int = 90
    B: int = 75
    C: int = 60
    D: int = 40

    @model_validator(mode="after")
    def check_order(self) -> "GradeThresholds":
        if not (100 >= self.A > self.B > self.C > self.D >= 0):
            raise ValueError("Grade thresholds must be strictly descending within 0-100")
        return self


DEFAULT_MAX_SCORES: Dict[str, float] = {
    "contact-info": 15,
    "professional-summary": 10,
    "work-experience": 25,
    "education": 10,
    "skills": 15,
    "keywords": 10,
    "quantifiable": 10,
    "content-length": 5,
}


class ScoringSettings(BaseModel):
    """ATS rubric weights and bands."""
    max_scores: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_MAX_SCORES))
    grades: GradeThresholds = Field(default_factory=GradeThresholds)

    summary_min_chars: int = 50
    summary_max_chars: int = 500
    min_description_chars: int = 40

    min_skills: int = 5
    ideal_skills: int = 8
    max_skills: int = 40

    action_verb_target: int = 8
    # Share of the verb target that passes the keywords check
    action_verb_pass_ratio: float = 0.25
    quantifiable_hit_target: int = 5

    content_min_words: int = 50
    content_max_words: int = 1000

    pass_ratio: float = 0.7
    quantifiable_pass_ratio: float = 0.6
    max_top_issues: int = 5

    @field_validator("max_scores")
    @classmethod
    def fill_max_scores(cls, value: Dict[str, float]) -> Dict[str, float]:
        unknown = set(value) - set(DEFAULT_MAX_SCORES)
        if unknown:
            raise ValueError(f"Unknown check ids: {sorted(unknown)}")
        if any(score <= 0 for score in value.values()):
            raise ValueError("Check max scores must be positive")
        return {**DEFAULT_MAX_SCORES, **value}


class Settings(BaseSettings):
    """Main application settings."""

    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    parser: ParserSettings = Field(default_factory=ParserSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)

    # Application settings from environment
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, validation_alias="LOG_FILE")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @classmethod
    def from_json(cls, config_path: str = "config.json") -> "Settings":
        """
        Load settings from JSON configuration file.

        Args:
            config_path: Path to JSON configuration file

        Returns:
            Settings instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
            return cls(**config_data)

        except FileNotFoundError:
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                "   Create it or call get_settings() without a path to use defaults"
            )
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file: {e}")
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}")

    def to_dict(self) -> Dict:
        """Convert settings to dictionary."""
        return self.model_dump(exclude_none=True)


@lru_cache()
def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Get cached settings instance.

    Args:
        config_path: Optional path to a JSON configuration file; defaults
            plus environment variables are used when omitted

    Returns:
        Settings instance (cached)
    """
    if config_path is None:
        return Settings()
    return Settings.from_json(config_path)
