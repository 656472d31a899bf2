"""Decoded METAR returned by ``GET /api/weather/metar/{icao}``."""

from datetime import datetime

from pydantic import Field

from vfrplan.contracts.common import PlannerModel
from vfrplan.contracts.enums import CloudCover

CEILING_COVERS = (CloudCover.BKN, CloudCover.OVC, CloudCover.OVX)


class CloudLayer(PlannerModel):
    cover: CloudCover
    base_ft: int | None = Field(default=None, ge=0, description="ft AGL; none for CLR/CAVOK")

    @property
    def code(self) -> str:
        """Report group, ``BKN060`` style."""
        if self.base_ft is None:
            return str(self.cover)
        return f"{self.cover}{round(self.base_ft / 100):03d}"


class SurfaceWind(PlannerModel):
    direction_deg: int | None = Field(default=None, ge=0, le=360, alias="direction")
    speed_kt: float | None = Field(default=None, ge=0, alias="speed")
    gust_kt: float | None = Field(default=None, ge=0, alias="gust")
    variable: bool = False


class MetarReport(PlannerModel):
    """One station report, decoded for the planner's weather panel.

    Visibility is always meters: 9999 reads as 10 km, statute-mile groups
    are converted. ``ceiling_ft`` is the lowest BKN/OVC/OVX base.
    """

    station: str = Field(..., pattern=r"^[A-Z0-9]{3,4}$")
    report_time: datetime | None = Field(default=None, alias="time")
    flight_category: str | None = Field(
        default=None, pattern=r"^(VFR|MVFR|IFR|LIFR)$", alias="flightCategory"
    )
    wind: SurfaceWind = Field(default_factory=SurfaceWind)
    visibility_m: int | None = Field(default=None, ge=0, alias="visibility")
    cavok: bool = False
    clouds: list[CloudLayer] = Field(default_factory=list)
    ceiling_ft: int | None = Field(default=None, ge=0, alias="ceiling")
    temperature_c: float | None = Field(default=None, alias="temperature")
    dewpoint_c: float | None = Field(default=None, alias="dewpoint")
    relative_humidity_pct: int | None = Field(default=None, ge=0, le=100, alias="humidity")
    qnh_hpa: float | None = Field(default=None, alias="altimeter")
    raw: str = ""
