"""
Exception hierarchy for the chart engine.

Data errors (bad intervals, naive instants, unsorted stages) are raised while
a transformation runs. Configuration errors (unknown time zones) are raised
when call parameters or settings are resolved.
"""


class ChartEngineError(Exception):
    """Base exception for all chart engine errors"""
    pass


class InvalidIntervalError(ChartEngineError, ValueError):
    """Interval end precedes its start"""

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"Interval end {end.isoformat()} precedes start {start.isoformat()}")


class NaiveDatetimeError(ChartEngineError, ValueError):
    """Instant has no time zone attached"""
    pass


class UnsortedInputError(ChartEngineError, ValueError):
    """Sequence is not ordered by start time"""

    def __init__(self, index: int):
        self.index = index
        super().__init__(
            f"Input is not sorted by start time: element {index} starts before element {index - 1}"
        )


class UnknownMeasurementError(ChartEngineError, KeyError):
    """Measurement name is not produced by the record kind"""

    def __init__(self, kind: str, measurement: str, available: list[str]):
        self.kind = kind
        self.measurement = measurement
        self.available = available
        super().__init__(
            f"Measurement '{measurement}' not available for {kind}. "
            f"Available measurements: {', '.join(available)}"
        )

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return self.args[0]


class UnsupportedAggregationError(ChartEngineError, ValueError):
    """Aggregation policy cannot be applied to the given data"""
    pass


class DuplicateBucketError(ChartEngineError, ValueError):
    """Several values share one bucket where a single value is required"""
    pass


class ConfigurationError(ChartEngineError):
    """Invalid engine configuration"""
    pass


class InvalidTimeZoneError(ConfigurationError, ValueError):
    """Time zone identifier cannot be resolved"""

    def __init__(self, time_zone: str):
        self.time_zone = time_zone
        super().__init__(f"Unknown time zone: {time_zone!r}")
