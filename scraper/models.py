from __future__ import annotations
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import datetime

# ---------------------------
# Written result document schema
# ---------------------------

class PhotoModel(BaseModel):
    url: str = ""
    alt: str = ""

class TripModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    date: str
    duration: str = ""
    price: str = ""
    availability: str
    is_available: bool = Field(alias="isAvailable")
    spots_left: int = Field(alias="spotsLeft", ge=0)
    your_price: str = Field(alias="yourPrice")
    rating: str = ""
    description: str = ""
    photo: PhotoModel
    reconocido_at: datetime = Field(alias="reconocidoAt")

    @field_validator("name", "date")
    @classmethod
    def non_empty(cls, v):
        if not v or not str(v).strip():
            raise ValueError("missing")
        return v

    @model_validator(mode="after")
    def your_price_needs_price(self):
        if self.your_price and not self.price:
            raise ValueError("yourPrice set without a source price")
        return self

class ResultDocument(BaseModel):
    """
    The file written by ResultWriterPipeline:
    {lastUpdated, totalTrips, filteredOut, source, trips: [...]}
    """
    model_config = ConfigDict(populate_by_name=True)

    last_updated: datetime = Field(alias="lastUpdated")
    total_trips: int = Field(alias="totalTrips", ge=0)
    filtered_out: str = Field(alias="filteredOut")
    source: str
    trips: List[TripModel] = []

    @model_validator(mode="after")
    def count_matches(self):
        if self.total_trips != len(self.trips):
            raise ValueError(f"totalTrips={self.total_trips} but {len(self.trips)} trips listed")
        return self

if __name__ == "__main__":
    import json
    print(json.dumps(ResultDocument.model_json_schema(by_alias=True), indent=2))
