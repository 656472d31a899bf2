"""Flight log export: spreadsheet template bindings and a printable PDF.

The spreadsheet template (``TemplateFlightLog.xlsx``) is filled client-side;
``build_flight_log`` computes what goes into which cell. The PDF is an A4
landscape sheet folded in two: main route on the left, alternate route and
fuel on the right.
"""

from __future__ import annotations

import io
import math

from pydantic import BaseModel, Field
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from vfrplan.contracts.flight_plan import FlightPlan
from vfrplan.contracts.route import RouteResult
from vfrplan.services.errors import InvalidInputError
from vfrplan.services.navigation import round1

FIRST_ROW = 11
MAIN_COLUMNS = "ABCDEF"
ALTERNATE_COLUMNS = "KLMNOP"
# Row 26 holds totals; column O holds fuel figures from row 21 down
MAX_MAIN_ROWS = 15
MAX_ALTERNATE_ROWS = 10

TOTAL_DISTANCE_CELL = "F26"
TOTAL_TIME_CELL = "I26"
TRIP_FUEL_CELL = "O21"
ALTERNATE_FUEL_CELL = "O22"
CONTINGENCY_FUEL_CELL = "O23"
RESERVE_FUEL_CELL = "O24"

HEADERS = ("FIX", "Route", "Alt. [ft]", "Dist. [NM]", "Radial", "Time [min]")


class FlightLogRow(BaseModel):
    """One printed row: the origin carries only its name."""

    fix: str
    route: int | None = None
    altitude: int | None = None
    distance: int | None = None
    radial: int | None = None
    flight_time: int | None = Field(default=None, serialization_alias="flightTime")

    def values(self) -> list[str | int | None]:
        return [self.fix, self.route, self.altitude, self.distance, self.radial, self.flight_time]


class FlightLog(BaseModel):
    """Rows per route plus the template cell bindings."""

    main_rows: list[FlightLogRow]
    alternate_rows: list[FlightLogRow] = Field(default_factory=list)
    cells: dict[str, str | int | float]
    alternate_error: str | None = Field(default=None, serialization_alias="alternateError")


def log_rows(route: RouteResult) -> list[FlightLogRow]:
    """Printed rows of a route, values rounded up as on the paper log."""
    rows = [FlightLogRow(fix=route.legs[0].from_waypoint.short_name)]
    for leg in route.legs:
        rows.append(
            FlightLogRow(
                fix=leg.to_waypoint.short_name,
                route=math.ceil(leg.bearing_deg),
                altitude=math.ceil(leg.altitude_ft),
                distance=math.ceil(leg.distance_nm),
                radial=math.ceil(leg.radial_deg),
                flight_time=math.ceil(leg.flight_time_min),
            )
        )
    return rows


def build_flight_log(plan: FlightPlan) -> FlightLog:
    """Compute the template cell values for a flight plan."""
    main_rows = log_rows(plan.main)
    if len(main_rows) > MAX_MAIN_ROWS:
        raise InvalidInputError(
            f"The flight log holds {MAX_MAIN_ROWS} main waypoints, got {len(main_rows)}",
            field="waypoints",
        )
    alternate_rows = log_rows(plan.alternate) if plan.alternate else []
    alternate_error = None
    if len(alternate_rows) > MAX_ALTERNATE_ROWS:
        # The main route still prints; only the alternate table is left blank
        alternate_error = (
            f"The flight log holds {MAX_ALTERNATE_ROWS} alternate waypoints, "
            f"got {len(alternate_rows)}"
        )
        alternate_rows = []

    cells: dict[str, str | int | float] = {}
    _bind_rows(cells, main_rows, MAIN_COLUMNS)
    _bind_rows(cells, alternate_rows, ALTERNATE_COLUMNS)

    cells[TOTAL_DISTANCE_CELL] = round1(plan.main.total_distance_nm)
    cells[TOTAL_TIME_CELL] = round1(plan.main.total_time_min)
    cells[TRIP_FUEL_CELL] = plan.fuel.trip_fuel
    cells[CONTINGENCY_FUEL_CELL] = plan.fuel.contingency_fuel
    cells[RESERVE_FUEL_CELL] = plan.fuel.reserve_fuel
    if plan.alternate_fuel_liters is not None:
        cells[ALTERNATE_FUEL_CELL] = plan.alternate_fuel_liters

    return FlightLog(
        main_rows=main_rows,
        alternate_rows=alternate_rows,
        cells=cells,
        alternate_error=alternate_error,
    )


def _bind_rows(cells: dict, rows: list[FlightLogRow], columns: str) -> None:
    for offset, row in enumerate(rows):
        for column, value in zip(columns, row.values()):
            if value is not None:
                cells[f"{column}{FIRST_ROW + offset}"] = value


def render_flight_log_pdf(plan: FlightPlan) -> bytes:
    """Render the flight log as a one-page A4 landscape PDF."""
    log = build_flight_log(plan)

    buf = io.BytesIO()
    page_w, page_h = landscape(A4)
    c = canvas.Canvas(buf, pagesize=(page_w, page_h))
    c.setTitle("VFR Flight Plan")

    margin = 10 * mm
    gutter = 10 * mm
    section_w = (page_w - 2 * margin - gutter) / 2
    left_x = margin
    right_x = margin + section_w + gutter
    top = page_h - margin

    main_bottom = _draw_route_table(c, left_x, top, section_w, "Main route", log.main_rows)
    c.setFont("Helvetica", 9)
    c.drawString(
        left_x,
        main_bottom - 6 * mm,
        f"Total: {round1(plan.main.total_distance_nm)} NM  /  "
        f"{round1(plan.main.total_time_min)} min",
    )

    y = top
    if log.alternate_rows:
        y = _draw_route_table(c, right_x, top, section_w, "Alternate", log.alternate_rows)
        y -= 10 * mm
    elif log.alternate_error:
        c.setFont("Helvetica-Oblique", 9)
        c.drawString(right_x, y - 5 * mm, f"Alternate not printed: {log.alternate_error}")
        y -= 12 * mm
    _draw_fuel_block(c, right_x, y, section_w, plan)

    # Fold line
    c.setDash(2, 2)
    c.line(page_w / 2, margin, page_w / 2, page_h - margin)

    c.showPage()
    c.save()
    return buf.getvalue()


def _draw_route_table(
    c: canvas.Canvas,
    x: float,
    top: float,
    width: float,
    title: str,
    rows: list[FlightLogRow],
) -> float:
    """Draw a titled grid; returns the y coordinate below it."""
    row_h = 7 * mm
    col_w = [width * r for r in (0.30, 0.12, 0.14, 0.14, 0.14, 0.16)]

    c.setFont("Helvetica-Bold", 12)
    c.drawString(x, top - 5 * mm, title)

    y = top - 10 * mm
    for values, bold in [(list(HEADERS), True)] + [(row.values(), False) for row in rows]:
        c.setFont("Helvetica-Bold" if bold else "Helvetica", 9)
        cx = x
        for col, (w, value) in enumerate(zip(col_w, values)):
            c.rect(cx, y - row_h, w, row_h)
            if value is not None:
                # Courses and radials print as three digits: 045
                text = f"{value:03d}" if col in (1, 4) and isinstance(value, int) else str(value)
                c.drawString(cx + 1.5 * mm, y - row_h + 2.3 * mm, text[:28])
            cx += w
        y -= row_h
    return y


def _draw_fuel_block(c: canvas.Canvas, x: float, top: float, width: float, plan: FlightPlan) -> None:
    lines = [
        ("Trip fuel", plan.fuel.trip_fuel),
        ("Alternate fuel", plan.alternate_fuel_liters),
        ("Contingency fuel", plan.fuel.contingency_fuel),
        ("Final reserve (45 min)", plan.fuel.reserve_fuel),
        ("Total fuel", plan.fuel.total_fuel),
    ]
    row_h = 7 * mm
    c.setFont("Helvetica-Bold", 12)
    c.drawString(x, top - 5 * mm, "Fuel [L]")
    y = top - 10 * mm
    for label, value in lines:
        if value is None:
            continue
        c.setFont("Helvetica-Bold" if label == "Total fuel" else "Helvetica", 9)
        c.rect(x, y - row_h, width * 0.6, row_h)
        c.rect(x + width * 0.6, y - row_h, width * 0.4, row_h)
        c.drawString(x + 1.5 * mm, y - row_h + 2.3 * mm, label)
        c.drawString(x + width * 0.6 + 1.5 * mm, y - row_h + 2.3 * mm, f"{value:.1f}")
        y -= row_h
