"""Airline operational Pydantic schemas."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MileUnit(str, Enum):
    """Unit a mileage figure was reported in."""

    UNITS = "units"
    THOUSANDS = "thousands"
    MILLIONS = "millions"

    @property
    def scale(self) -> Decimal:
        """Multiplier that converts a figure in this unit into actual miles."""
        return _MILE_SCALE[self]


_MILE_SCALE: dict[MileUnit, Decimal] = {
    MileUnit.UNITS: Decimal(1),
    MileUnit.THOUSANDS: Decimal(1_000),
    MileUnit.MILLIONS: Decimal(1_000_000),
}


class MissingFuelPolicy(str, Enum):
    """How CASM-ex treats an income statement with no fuel cost line."""

    SUPPRESS = "suppress"
    ZERO = "zero"


class AirlineOperationalData(BaseModel):
    """Raw operating statistics for one fiscal year.

    Mileage fields share ``mile_unit`` (millions, as airlines report them in
    their 10-K traffic tables).
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    fiscal_year: str | None = None
    mile_unit: MileUnit = MileUnit.MILLIONS
    available_seat_miles: Decimal | None = Field(None, description="ASM, capacity")
    revenue_passenger_miles: Decimal | None = Field(None, description="RPM, demand")
    available_ton_miles: Decimal | None = None
    cargo_ton_miles: Decimal | None = None
    passengers_carried: int | None = None
    departures_performed: Decimal | None = None
    reported_passenger_load_factor: Decimal | None = Field(
        None, description="Load factor disclosed in the filing, percent"
    )

    def actual_miles(self, value: Decimal | None) -> Decimal | None:
        """Convert a mileage figure in ``mile_unit`` into actual miles.

        Returns None for a missing figure or one too large to scale.
        """
        if value is None:
            return None
        try:
            return value * self.mile_unit.scale
        except ArithmeticError:
            return None


class AirlineMetrics(BaseModel):
    """Derived airline unit economics. Percent fields are x100, unit fields in cents."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    fiscal_year: str | None = None
    passenger_load_factor: Decimal | None = None
    cargo_load_factor: Decimal | None = None
    rasm: Decimal | None = None
    casm: Decimal | None = None
    casm_ex: Decimal | None = None
    passenger_yield: Decimal | None = None
    cargo_yield: Decimal | None = None
    break_even_load_factor: Decimal | None = None
    average_stage_length: Decimal | None = None
