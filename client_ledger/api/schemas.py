"""
Pydantic schemas for API requests and responses
"""

from decimal import Decimal
from typing import Any
from pydantic import BaseModel, Field

from ..accounts import ClientProfile


class ClientInfo(BaseModel):
    name: str
    birth_date: str
    document_number: str = Field(..., min_length=1)
    country: str

    def to_profile(self) -> ClientProfile:
        return ClientProfile(
            name=self.name,
            birth_date=self.birth_date,
            document_number=self.document_number,
            country=self.country
        )


class CreditOrDebitRequest(BaseModel):
    client_id: str
    amount: Decimal = Field(..., ge=0, description="Non-negative decimal amount, preferably as string")


class GenericResponse(BaseModel):
    status: str
    message: str


class SingleResponse(BaseModel):
    status: str
    data: Any


def success(data: Any) -> dict:
    return SingleResponse(status="success", data=data).model_dump()


def fail(message: str) -> dict:
    return GenericResponse(status="fail", message=message).model_dump()
