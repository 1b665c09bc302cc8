"""Configuration for the totals engine.

The engine itself only ever receives :class:`CalculationConfig` and
:class:`ValidationPolicy` instances. :class:`Settings` reads them from the
environment for the HTTP layer.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .calculator import DiscountPolicy
from .formatting import CurrencyFormat
from .models import Money, Percentage


class CalculationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    tax_percentage: Percentage = Decimal("19")
    currency: CurrencyFormat = Field(default_factory=CurrencyFormat)
    discount_policy: Optional[DiscountPolicy] = None

    @field_validator("tax_percentage")
    @classmethod
    def _tax_not_negative(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("tax percentage cannot be negative")
        return value


class ValidationPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    minimum_total: Money = Decimal("0")
    high_discount_threshold: Percentage = Decimal("50")
    observations_max_length: int = 500
    observations_warning_margin: int = 50
    totals_tolerance: Money = Decimal("0.01")


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_prefix="FACTURACION_")

    log_level: str = "INFO"

    tax_percentage: Decimal = Decimal("19")

    currency_symbol: str = "$"
    currency_decimal_separator: str = ","
    currency_thousands_separator: str = "."
    currency_decimal_places: int = 2

    # Applied only when a draft carries no discount of its own.
    auto_discount_enabled: bool = True
    auto_discount_percentage: Decimal = Decimal("5")
    auto_discount_minimum_subtotal: Decimal = Decimal("500000")

    minimum_total: Decimal = Decimal("0")
    high_discount_threshold: Decimal = Decimal("50")
    observations_max_length: int = 500
    observations_warning_margin: int = 50

    def calculation_config(self) -> CalculationConfig:
        policy = None
        if self.auto_discount_enabled:
            policy = DiscountPolicy(
                percentage=self.auto_discount_percentage,
                minimum_subtotal=self.auto_discount_minimum_subtotal,
            )
        return CalculationConfig(
            tax_percentage=self.tax_percentage,
            currency=CurrencyFormat(
                symbol=self.currency_symbol,
                decimal_separator=self.currency_decimal_separator,
                thousands_separator=self.currency_thousands_separator,
                decimal_places=self.currency_decimal_places,
            ),
            discount_policy=policy,
        )

    def validation_policy(self) -> ValidationPolicy:
        return ValidationPolicy(
            minimum_total=self.minimum_total,
            high_discount_threshold=self.high_discount_threshold,
            observations_max_length=self.observations_max_length,
            observations_warning_margin=self.observations_warning_margin,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
