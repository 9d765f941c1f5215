"""
Directory entities — suppliers, buyers and the drafts they are created from.

The model is permissive by design of the directory: optional fields default
(empty strings, empty lists) instead of failing validation, and ``None``
list fields are coerced to ``[]``. Presentation code substitutes ``"N/A"``
for blanks at render time.

Entities are frozen. An entity is changed only by replacing it wholesale in
the store (``AppState.replace_supplier``); there is no field-level mutation
and no deletion.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fruitlink.taxonomy.trade_taxonomy import Volume


class PriceRange(BaseModel):
    """Per-fruit price band, e.g. 1.2–2.0 USD per kg."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    currency: str = "USD"
    unit: str = "kg"


class Supplier(BaseModel):
    """A fruit exporter listed in the directory.

    Attributes:
        id: Store-assigned identifier, never reused.
        name: Company name.
        location: Free-text location shown on cards (often equal to country).
        country: Country name; the country facet matches this exactly.
        fruits_offered: Free-text fruit labels; matched by string equality.
        certifications: Certification labels (e.g. ``"GLOBALG.A.P"``).
        price_range: Fruit → ``PriceRange``.
        reliability: Trust score, conceptually 0–100 (not enforced).
        established: Founding year.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    location: str = ""
    country: str = ""
    fruits_offered: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    contact_email: str = ""
    contact_phone: str = ""
    description: str = ""
    price_range: dict[str, PriceRange] = Field(default_factory=dict)
    reliability: float = 0.0
    established: Optional[int] = None

    @field_validator("fruits_offered", "certifications", mode="before")
    @classmethod
    def default_missing_lists(cls, v):
        return [] if v is None else v

    @field_validator("price_range", mode="before")
    @classmethod
    def default_missing_ranges(cls, v):
        return {} if v is None else v


class Buyer(BaseModel):
    """A fruit importer listed in the directory.

    Mirrors ``Supplier`` with ``fruits_interested`` instead of offered fruits,
    ``budget_range`` instead of price range and a categorical ``volume``
    instead of reliability.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    location: str = ""
    country: str = ""
    fruits_interested: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    contact_email: str = ""
    contact_phone: str = ""
    description: str = ""
    budget_range: dict[str, PriceRange] = Field(default_factory=dict)
    volume: Volume = Volume.MEDIUM
    established: Optional[int] = None

    @field_validator("fruits_interested", "certifications", mode="before")
    @classmethod
    def default_missing_lists(cls, v):
        return [] if v is None else v

    @field_validator("budget_range", mode="before")
    @classmethod
    def default_missing_ranges(cls, v):
        return {} if v is None else v


class SupplierDraft(BaseModel):
    """The minimal facts needed to create a supplier (from chat or a form)."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str
    fruits_offered: list[str]


class BuyerDraft(BaseModel):
    """The minimal facts needed to create a buyer. Country may be blank."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str = ""
    fruits_interested: list[str]
