"""
Pydantic models for generated tokens.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from warden.models.security import TokenSortBy, TokenStatus, TokenType
from .common import PageInfo


class TokenClaim(BaseModel):
    name: str = Field(min_length=1)
    values: list[str] = Field(default_factory=list)


class GenerateTokenRequest(BaseModel):
    type: TokenType = TokenType.JWT
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=200)
    valid_from_date: date | None = None
    expiry_date: date | None = None
    claims: list[TokenClaim] = Field(default_factory=list)


class TokenSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    token_id: str
    type: TokenType
    name: str
    issued: datetime | None = None
    valid_from_date: date | None = None
    expiry_date: date | None = None
    revocation_date: date | None = None
    status: TokenStatus


class TokenModel(TokenSummary):
    description: str = ""
    claims: list[TokenClaim] = Field(default_factory=list)
    data: str


class TokenSummaries(PageInfo):
    status: TokenStatus | None = None
    sort_by: TokenSortBy | None = None
    token_summaries: list[TokenSummary]
