"""Occupancy and revenue summary."""
from pydantic import BaseModel


class Occupancy(BaseModel):
    total: int
    occupied: int
    vacant: int


class Revenue(BaseModel):
    collected: float
    pending: float


class SummaryResponse(BaseModel):
    occupancy: Occupancy
    revenue: Revenue
