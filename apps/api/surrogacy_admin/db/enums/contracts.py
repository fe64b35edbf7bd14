"""Contract enums."""

from enum import Enum


class ContractStatus(str, Enum):
    DRAFT = "draft"
    UNDER_REVIEW = "under_review"
    PENDING_SIGNATURE = "pending_signature"
    ACTIVE = "active"
    EXPIRED = "expired"


class ContractType(str, Enum):
    SURROGACY_AGREEMENT = "surrogacy_agreement"
    MEDICAL_AUTHORIZATION = "medical_authorization"
    COMPENSATION_AGREEMENT = "compensation_agreement"
    CONFIDENTIALITY_AGREEMENT = "confidentiality_agreement"
