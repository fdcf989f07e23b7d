from pydantic import BaseModel, ConfigDict, Field


class TaxPayer(BaseModel):
    """A single taxpayer record. Records are never edited once stored."""

    # Wire names only: firstName, lastName
    model_config = ConfigDict(frozen=True)

    tid: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    address: str


class AddTaxPayerResponse(BaseModel):
    status: str = "success"
