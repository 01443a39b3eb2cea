"""
Pydantic models for price records.

Prices are grouped by environment (``HML`` for homologation, ``PRD``
for production) and, inside each environment, by two‑letter Brazilian
region code.  Values are decimals kept as strings, exactly as typed
into the dashboard.
"""

from typing import Dict

from pydantic import BaseModel, Field


ENVIRONMENTS = ("HML", "PRD")

BRAZILIAN_STATES = (
    "AC", "AL", "AM", "AP", "BA", "CE", "DF", "ES", "GO", "MA",
    "MG", "MS", "MT", "PA", "PB", "PE", "PI", "PR", "RJ", "RN",
    "RO", "RR", "RS", "SC", "SE", "SP", "TO",
)


def empty_price_table() -> Dict[str, Dict[str, str]]:
    return {env: {} for env in ENVIRONMENTS}


class Price(BaseModel):
    """A price record as edited in the dashboard."""

    id: str = Field(..., examples=["p1"])
    code: str = Field(..., examples=["SKU-001"])
    um: str = Field(..., examples=["UN"])
    prices: Dict[str, Dict[str, str]] = Field(
        default_factory=empty_price_table,
        examples=[{"HML": {"SP": "10.00"}, "PRD": {"SP": "12.00"}}],
    )

    model_config = {"extra": "allow"}
