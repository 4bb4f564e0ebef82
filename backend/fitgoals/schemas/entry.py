from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from fitgoals.core.constants import MAX_MEASUREMENT


# Dates may arrive as a calendar day ("2025-01-01") or a full timestamp;
# strings are kept as-is and normalized to UTC by the entry store.
EntryDate = Optional[Union[str, datetime, date]]


class WeightEntryCreate(BaseModel):
    weight: float = Field(..., gt=0, lt=MAX_MEASUREMENT, allow_inf_nan=False)
    date: EntryDate = None


class RunEntryCreate(BaseModel):
    distance: float = Field(..., gt=0, lt=MAX_MEASUREMENT, allow_inf_nan=False)  # miles, e.g. 3.1
    date: EntryDate = None


class EatingWellEntryCreate(BaseModel):
    date: EntryDate = None


class WeightEntryRead(BaseModel):
    date: datetime
    weight: float

    model_config = ConfigDict(from_attributes=True)


class RunEntryRead(BaseModel):
    date: datetime
    distance: float

    model_config = ConfigDict(from_attributes=True)


class EatingWellEntryRead(BaseModel):
    date: datetime
    ate_well: bool

    model_config = ConfigDict(from_attributes=True)


class RunImportRead(RunEntryRead):
    id: int
    source: str
    duration_seconds: int
    file_id: int
