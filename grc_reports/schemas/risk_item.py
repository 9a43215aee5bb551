"""Schemas for risk items."""

from __future__ import annotations

from pydantic import ConfigDict, Field, field_validator, model_validator

from grc_reports.schemas.common import CamelModel, RiskCategory, RiskLevel, RiskStatus
from grc_reports.services.risk_scoring import MAX_RATING, MIN_RATING, score_to_level


def _strip_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Risk name is required")
    return v


class RiskItemCreate(CamelModel):
    """Request to add a risk item to a report.

    Ratings must be JSON integers; booleans, strings and floats are
    rejected rather than coerced.

    ``risk_level`` is derived from likelihood and impact. It may be sent
    for convenience but must agree with the scoring model.
    """

    report_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    category: RiskCategory
    likelihood: int = Field(..., ge=MIN_RATING, le=MAX_RATING, strict=True)
    impact: int = Field(..., ge=MIN_RATING, le=MAX_RATING, strict=True)
    risk_level: RiskLevel | None = None
    mitigation: str | None = None
    status: RiskStatus = RiskStatus.OPEN

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str | None) -> str | None:
        return _strip_name(v)

    @model_validator(mode="after")
    def _risk_level_matches_ratings(self) -> RiskItemCreate:
        expected = score_to_level(self.likelihood, self.impact)
        if self.risk_level is not None and self.risk_level != expected:
            raise ValueError(
                f"riskLevel '{self.risk_level.value}' does not match likelihood "
                f"{self.likelihood} x impact {self.impact} (expected '{expected.value}')"
            )
        return self


class RiskItemUpdate(CamelModel):
    """Partial risk item update.

    Neither the owning report nor the derived risk level can be changed
    here; the level follows likelihood and impact.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category: RiskCategory | None = None
    likelihood: int | None = Field(default=None, ge=MIN_RATING, le=MAX_RATING, strict=True)
    impact: int | None = Field(default=None, ge=MIN_RATING, le=MAX_RATING, strict=True)
    mitigation: str | None = None
    status: RiskStatus | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str | None) -> str | None:
        return _strip_name(v)

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> RiskItemUpdate:
        for name in ("name", "category", "likelihood", "impact", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class RiskItem(CamelModel):
    """A stored risk item."""

    id: int
    report_id: int
    name: str
    description: str | None = None
    category: RiskCategory
    likelihood: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    impact: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    risk_level: RiskLevel
    mitigation: str | None = None
    status: RiskStatus = RiskStatus.OPEN
