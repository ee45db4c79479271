from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Slot(str, Enum):
    UPPER = "upper"
    LOWER = "lower"
    FOOTWEAR = "footwear"
    ACCESSORIES = "accessories"


class ProductSearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    style_id: str | None = Field(default=None, alias="styleId")


class SearchedProductOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    price: str
    source: str
    link: str
    thumbnail: str
    category: Slot
    rating: float | None = None
    reviews: int | None = None
    match_percentage: int = Field(alias="matchPercentage")


class ProductSearchResponse(BaseModel):
    upper: list[SearchedProductOut] = Field(default_factory=list)
    lower: list[SearchedProductOut] = Field(default_factory=list)
    accessories: list[SearchedProductOut] = Field(default_factory=list)
    footwear: list[SearchedProductOut] = Field(default_factory=list)

    def slot(self, slot: Slot) -> list[SearchedProductOut]:
        return getattr(self, slot.value)
