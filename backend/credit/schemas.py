# backend/credit/schemas.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool


class UpdateConsentSchema(BaseModel):
    consent: StrictBool


class LoanApplicationSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    offer_id: str = Field(..., alias="offerId", min_length=1)
    amount: float = Field(..., gt=0, strict=True, allow_inf_nan=False, description="Requested principal")
    purpose: str = Field(..., min_length=1, max_length=500)
    legal_name: str = Field(..., alias="legalName", min_length=2)
    email: EmailStr
    phone: str = Field(..., min_length=5)
    country: str = Field(..., min_length=2)
    payout_account: Optional[str] = Field(None, alias="payoutAccount")
    kyc_completed: StrictBool = Field(..., alias="kycCompleted")
