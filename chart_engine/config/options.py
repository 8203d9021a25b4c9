"""
Transformation options

This module defines the validated parameter set for one dispatch run.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..chart.marks import BaseChartMark
from ..errors import InvalidTimeZoneError, UnknownMeasurementError
from ..processors.dispatcher import dispatch_by_type, get_processor_factory
from ..transform.alignment import resolve_time_zone
from ..types.common import AggregationType, MassUnit, TimeUnit
from .settings import EngineSettings


class TransformOptions(BaseModel):
    """Parameters for transforming a batch of records into chart marks"""

    time_unit: TimeUnit = Field(
        default=TimeUnit.DAY,
        description="Bucket granularity of the output series"
    )
    aggregation: AggregationType = Field(
        default=AggregationType.SUM,
        description="How values sharing a bucket are combined"
    )
    time_zone: str = Field(
        default="UTC",
        description="IANA zone used for bucket boundaries and labels"
    )
    measurements: dict[str, str] = Field(
        default_factory=dict,
        description="Record kind name -> measurement to chart (e.g. Diet -> protein)"
    )
    fill_gaps: bool = Field(
        default=False,
        description="Insert empty buckets between the first and last bucket"
    )
    fill_value: float = Field(
        default=0.0,
        description="Value of inserted buckets"
    )
    mass_unit: MassUnit = Field(
        default=MassUnit.KILOGRAM,
        description="Unit weight series are charted in"
    )

    @field_validator("time_zone")
    @classmethod
    def validate_time_zone(cls, v: str) -> str:
        try:
            resolve_time_zone(v)
        except InvalidTimeZoneError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("measurements")
    @classmethod
    def validate_measurements(cls, v: dict[str, str]) -> dict[str, str]:
        """Every override must name a supported kind and one of its measurements."""
        factory = get_processor_factory()
        for kind, measurement in v.items():
            processor = factory.get_processor(kind)
            try:
                processor.resolve_measurement(measurement)
            except UnknownMeasurementError as e:
                raise ValueError(str(e)) from e
        return v

    @classmethod
    def from_settings(cls, settings: EngineSettings, **overrides: Any) -> "TransformOptions":
        """Build options from settings defaults; None overrides are ignored."""
        values = {
            "time_unit": settings.default_time_unit,
            "aggregation": settings.default_aggregation,
            "time_zone": settings.default_time_zone,
            "fill_gaps": settings.fill_gaps,
            "fill_value": settings.fill_value,
            "mass_unit": settings.default_mass_unit,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def dispatch(self, records: Iterable[Any]) -> dict[str, list[BaseChartMark]]:
        """Run dispatch_by_type with these options."""
        return dispatch_by_type(
            records,
            time_unit=self.time_unit,
            aggregation=self.aggregation,
            time_zone=self.time_zone,
            measurements=self.measurements,
            fill_gaps=self.fill_gaps,
            fill_value=self.fill_value,
            mass_unit=self.mass_unit,
        )
