"""
Data contracts for Steam Store responses and the Game record.

The appdetails payload is validated into StoreAppDetails, which is then
normalized into the immutable Game record handed back to callers.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def to_major_units(cents: int) -> float:
    """Convert a minor-unit price (cents) to a 2-decimal major-unit value."""
    return round(cents / 100, 2)


class PriceOverview(BaseModel):
    """Price information for a game."""

    currency: str = Field(..., description="Currency code (e.g., USD, EUR)")
    initial: int = Field(..., ge=0, description="Initial price in cents")
    final: int = Field(..., ge=0, description="Final price in cents (after discount)")
    discount_percent: int = Field(..., ge=0, le=100, description="Discount percentage")


class StoreAppDetails(BaseModel):
    """
    The "data" object of an /appdetails response.

    Only the fields a Game is built from are declared; the rest of the
    payload is ignored.
    """

    steam_appid: int = Field(..., description="Steam application ID")
    name: str = Field(..., description="Game name")
    short_description: str = Field(default="", description="Brief description (may contain HTML)")
    header_image: str = Field(default="", description="Header image URL")
    developers: list[str] = Field(default_factory=list)
    publishers: list[str] = Field(default_factory=list)

    # Free games don't have this
    price_overview: PriceOverview | None = Field(default=None)

    @field_validator("developers", "publishers", mode="before")
    @classmethod
    def coerce_null_list(cls, v: list[str] | None) -> list[str]:
        """The API sends null instead of [] for some apps."""
        return v or []


class StoreAppResponse(BaseModel):
    """
    Per-app wrapper of an /appdetails response.

    The API returns {app_id: {success: bool, data: {...}}}
    """

    success: bool
    data: StoreAppDetails | None = None


class Game(BaseModel):
    """A resolved Steam Store game."""

    model_config = ConfigDict(frozen=True)

    app_id: str
    name: str
    short_description: str
    header_image_url: str
    developer: str | None = None
    publisher: str | None = None
    retail_price: float = Field(default=0.0, ge=0)
    discounted_price: float = Field(default=0.0, ge=0)
    discount_percent: int = Field(default=0, ge=0, le=100)
    currency_code: str | None = None

    @model_validator(mode="after")
    def check_discount(self) -> "Game":
        if self.discounted_price > self.retail_price:
            raise ValueError(
                f"discounted_price {self.discounted_price} exceeds retail_price {self.retail_price}"
            )
        if self.discount_percent == 0 and self.discounted_price != self.retail_price:
            raise ValueError("discounted_price must equal retail_price when there is no discount")
        return self

    @property
    def is_discounted(self) -> bool:
        return self.discount_percent > 0
