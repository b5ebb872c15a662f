import json
from typing import List

from pydantic import BaseModel, Field


class ReadingEntry(BaseModel):
    """One datapoint of one reading, as carried in an event's ``readings`` list."""

    id: str = Field(..., description="Datapoint name followed by the reading id. Unique on the EdgeX side.")
    origin: str = Field(..., description="Origin timestamp of the reading.")
    pushed: str = "0"
    name: str = Field(..., description="Datapoint name.")
    value: str = Field(..., description="Rendered datapoint value.")


class Envelope(BaseModel):
    """EdgeX core-data event for one asset: the body of a single POST."""

    created: str = "0"
    device: str = Field(..., description="Asset name.")
    id: str = Field(..., description="Id of the first reading contributing to the event.")
    modified: str = "0"
    origin: str = "0"
    pushed: str = "0"
    readings: List[ReadingEntry] = Field(default_factory=list)

    def to_json(self) -> str:
        return json.dumps(self.model_dump())
