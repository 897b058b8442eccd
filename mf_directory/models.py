from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class SchemeRecord(BaseModel):
    """One scheme in the mfapi.in master list (wire names are camelCase)."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    scheme_code: str = Field(alias="schemeCode")
    scheme_name: str = Field(alias="schemeName")
    isin_growth: Optional[str] = Field(default=None, alias="isinGrowth")
    isin_div_reinvestment: Optional[str] = Field(default=None, alias="isinDivReinvestment")
