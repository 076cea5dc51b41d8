# path: bike-router-api/bike_router/models/route_models.py

from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)

    def as_param(self) -> str:
        return f"{self.lat:f},{self.lng:f}"


### Request


class RouteInput(BaseModel):
    origin: Coordinates
    destination: str = Field(min_length=1)
    # Optional per-request thresholds; fall back to configuration when unset.
    spacing_m: Optional[float] = Field(default=None, gt=0)
    zigzag_m: Optional[float] = Field(default=None, gt=0)

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("destination must not be blank")
        return value


### RAW: what the directions provider hands us


class RawStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_location: Coordinates
    end_location: Coordinates
    html_instructions: str = ""
    distance_m: int = Field(default=0, ge=0)
    duration_s: int = Field(default=0, ge=0)
    maneuver: str = ""


class RawLeg(BaseModel):
    model_config = ConfigDict(frozen=True)

    steps: List[RawStep] = Field(default_factory=list)
    end_location: Coordinates


class RawRoute(BaseModel):
    model_config = ConfigDict(frozen=True)

    legs: List[RawLeg] = Field(default_factory=list)


### REFINED: the wire contract clients consume


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float
    description: str = ""
    elevation: float = 0.0  # meters
    is_down_hill: bool = False


class Instruction(BaseModel):
    model_config = ConfigDict(frozen=True)

    instruction: str  # provider markup, e.g. "Turn <b>left</b> onto <b>Market St</b>"
    distance_meters: int = Field(ge=0)  # from route start to this instruction
    duration_seconds: int = Field(ge=0)  # from route start to this instruction
    maneuver: str = ""
    street_name: str = ""
    start_location: Coordinates


class Route(BaseModel):
    id: int = Field(ge=1)
    points: List[Point] = Field(default_factory=list)  # simplified polyline for map display
    instructions: List[Instruction] = Field(default_factory=list)  # turn-by-turn


class RouteOutput(BaseModel):
    routes: List[Route] = Field(default_factory=list)
