"""Pydantic schemas for incoming signed quotes.

Field names follow the 0x signed order JSON (camelCase). Amounts arrive as
decimal strings of token base units. Order fields the validator does not
need (signature, expiry, fees, ...) are accepted and ignored.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from src.fq_common.amounts import parse_amount
from src.fq_common.errors import InvalidQuoteAmountError
from src.fq_quote.domain.asset_data import decode_erc20_asset_data
from src.fq_quote.domain.models import Quote


class SignedQuoteIn(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    maker_address: str = Field(alias="makerAddress", min_length=1)
    maker_asset_data: str = Field(alias="makerAssetData", min_length=1)
    maker_asset_amount: Decimal = Field(alias="makerAssetAmount")
    taker_asset_amount: Decimal = Field(alias="takerAssetAmount")

    @field_validator("maker_asset_amount", "taker_asset_amount", mode="before")
    @classmethod
    def _parse_amount(cls, v: object, info: ValidationInfo) -> Decimal:
        try:
            return parse_amount(v)  # type: ignore[arg-type]
        except (ValueError, TypeError) as exc:
            raise InvalidQuoteAmountError(str(info.field_name), v) from exc

    def to_domain(self) -> Quote:
        """Decode the maker asset data. Raises InvalidAssetDataError."""
        return Quote(
            maker_address=self.maker_address,
            maker_asset_address=decode_erc20_asset_data(self.maker_asset_data),
            maker_asset_amount=self.maker_asset_amount,
            taker_asset_amount=self.taker_asset_amount,
        )


def quotes_from_payload(orders: list[dict]) -> list[Quote]:
    """Validate and decode a batch of signed order dicts, preserving order."""
    return [SignedQuoteIn.model_validate(order).to_domain() for order in orders]
