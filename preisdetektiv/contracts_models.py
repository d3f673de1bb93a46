from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AnalysisResult(BaseModel):
    model_config = ConfigDict(validate_by_name=True, extra="forbid", strict=True)

    product_name: str = Field(..., alias="productName")
    current_price: str = Field(..., alias="currentPrice")
    without_eu_price: str = Field(..., alias="withoutEUPrice")
    price_increase: str = Field(..., alias="priceIncrease")
    explanation: str
    made_in_eu: bool = Field(..., alias="madeInEU")


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
