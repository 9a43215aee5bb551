"""Shared schema base and enumerations."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase keys on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RiskLevel(str, Enum):
    VERY_LOW = "very-low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskCategory(str, Enum):
    CYBERSECURITY = "cybersecurity"
    OPERATIONAL = "operational"
    FINANCIAL = "financial"
    COMPLIANCE = "compliance"
    STRATEGIC = "strategic"
    REPUTATIONAL = "reputational"


class RiskStatus(str, Enum):
    OPEN = "open"
    MITIGATED = "mitigated"
    ACCEPTED = "accepted"


class ReportType(str, Enum):
    """Report types, one per template in the catalog."""

    RISK_ASSESSMENT = "risk-assessment"
    POLICY_COMPLIANCE = "policy-compliance"
    INCIDENT_REPORT = "incident-report"
    BUSINESS_IMPACT = "business-impact"
    VENDOR_RISK = "vendor-risk"


class ReportStatus(str, Enum):
    DRAFT = "draft"
    COMPLETED = "completed"


class OrganizationSize(str, Enum):
    STARTUP = "startup"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class ComplianceFramework(str, Enum):
    ISO27001 = "iso27001"
    NIST = "nist"
    SOX = "sox"
    GDPR = "gdpr"
    HIPAA = "hipaa"
    CUSTOM = "custom"
