"""Airport reference data (OurAirports) and runway wind components."""

from pydantic import Field

from vfrplan.contracts.common import PlannerModel


class Runway(PlannerModel):
    """One physical runway, identified by both ends (``12``/``30``)."""

    le_ident: str
    he_ident: str
    length_ft: int | None = None
    width_ft: int | None = None
    surface: str = ""
    lighted: bool = False
    closed: bool = False


class RadioFrequency(PlannerModel):
    type: str
    description: str = ""
    frequency_mhz: float


class NearbyAirport(PlannerModel):
    ident: str
    name: str
    type: str
    latitude: float
    longitude: float
    distance_nm: float = Field(..., ge=0)


class AirportInfo(PlannerModel):
    """Airport record with its runways, frequencies and neighbours."""

    ident: str
    name: str
    type: str
    latitude: float
    longitude: float
    elevation_ft: int | None = None
    municipality: str = ""
    iso_country: str = ""
    runways: list[Runway] = Field(default_factory=list)
    frequencies: list[RadioFrequency] = Field(default_factory=list)
    nearby: list[NearbyAirport] = Field(default_factory=list)


class RunwayWind(PlannerModel):
    """Wind components on one runway end.

    Positive crosswind blows from the right of the landing direction.
    """

    ident: str
    heading_deg: int
    headwind_kt: float
    crosswind_kt: float
    crosswind_pct: float = Field(..., ge=0, le=100)
