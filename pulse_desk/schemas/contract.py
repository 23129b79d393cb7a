"""Contract editor form state and service plans."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


@dataclass(frozen=True)
class Plan:
    value: str
    label: str
    price: int


PLANS: list[Plan] = [
    Plan("basic", "Basic plan - R$ 1.200", 1200),
    Plan("standard", "Standard plan - R$ 1.700", 1700),
    Plan("premium", "Premium plan - R$ 2.500", 2500),
    Plan("enterprise", "Enterprise plan - R$ 4.000", 4000),
]


class ContractData(BaseModel):
    client_name: str = ""
    client_tax_id: str = ""
    client_address: str = ""
    value: str = ""
    start_date: str = ""
    end_date: str = ""
    plan: str = ""
    additional_terms: str = ""

    model_config = {"str_strip_whitespace": True}
