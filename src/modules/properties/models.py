"""
Property Models.

Pydantic model for normalized listing data.
"""

import math
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.utils.parsers.photos import MAX_PHOTOS

PLACEHOLDER_PHOTO = "https://images.unsplash.com/photo-1560448204-e02f11c3d0e2?w=800"

NON_NEGATIVE_FIELDS = (
    "bedrooms",
    "bathrooms",
    "area",
    "inside_area",
    "covered_veranda",
    "uncovered_veranda",
    "basement",
    "plot",
    "clean_price",
    "price_sqm",
)


class Property(BaseModel):
    """Normalized listing record. Frozen: derive copies instead of mutating."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Identity
    id: str = Field(min_length=1)
    external_id: str = Field(default="", alias="externalId")
    apartment_no: str = Field(default="", alias="apartmentNo")
    source: str = "csv"

    # Main fields
    title: str = ""
    type: str = ""
    status: str = ""
    location: str = ""
    district: str = ""

    # Coordinates
    latitude: float | None = None
    longitude: float | None = None

    # Rooms
    bedrooms: float = 0
    bathrooms: float = 0

    # Areas (m²)
    area: float = 0
    inside_area: float = Field(default=0, alias="insideArea")
    covered_veranda: float = Field(default=0, alias="coveredVeranda")
    uncovered_veranda: float = Field(default=0, alias="uncoveredVeranda")
    basement: float = 0
    plot: float = 0

    # Price
    price: str = ""
    clean_price: float = Field(default=0, alias="cleanPrice")
    price_sqm: float = Field(default=0, alias="priceSqm")
    currency: str = "EUR"

    # Media
    photos: list[str] = Field(default_factory=lambda: [PLACEHOLDER_PHOTO])
    url: str = ""

    # Description
    features: str = ""
    description: str = ""
    additional_info: str = Field(default="", alias="additionalInfo")

    # Meta
    synced_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="syncedAt"
    )
    broker_phone: str | None = Field(default=None, alias="brokerPhone")

    @field_validator(*NON_NEGATIVE_FIELDS, mode="before")
    @classmethod
    def clamp_non_negative(cls, v: Any) -> float:
        """Coerce invalid, NaN or negative numbers to 0."""
        if v is None or isinstance(v, bool):
            return 0.0
        try:
            number = float(v)
        except (TypeError, ValueError):
            return 0.0
        if not math.isfinite(number) or number < 0:
            return 0.0
        return number

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def parse_coordinate(cls, v: Any) -> float | None:
        """Keep finite coordinates, drop anything else."""
        if v is None or v == "" or isinstance(v, bool):
            return None
        try:
            number = float(v)
        except (TypeError, ValueError):
            return None
        return number if math.isfinite(number) else None

    @field_validator("photos", mode="after")
    @classmethod
    def bound_photos(cls, v: list[str]) -> list[str]:
        """Keep 1..MAX_PHOTOS entries, falling back to the placeholder."""
        photos = [url for url in v if url]
        if not photos:
            return [PLACEHOLDER_PHOTO]
        return photos[:MAX_PHOTOS]

    @field_validator("currency", mode="before")
    @classmethod
    def default_currency(cls, v: Any) -> str:
        """Empty currency falls back to EUR."""
        return str(v).strip() if v else "EUR"

    def with_broker_phone(self, phone: str | None) -> "Property":
        """Return a copy carrying the broker's phone number."""
        return self.model_copy(update={"broker_phone": phone})

    def to_display_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys for the presentation layer."""
        return self.model_dump(by_alias=True, mode="json")

    def __str__(self) -> str:
        """String representation for console output."""
        return (
            f"[{self.id}] {self.title or 'Untitled Property'}\n"
            f"    {self.price} | {self.bedrooms:g} bd | {self.area:g} m²\n"
            f"    {self.location or 'N/A'} {self.district}".rstrip()
        )
