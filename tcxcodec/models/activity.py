"""Data models for TCX documents."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Optional, Tuple

from .enums import IntensityValue, SensorStateValue, SportValue, TriggerMethodValue


@dataclass(frozen=True)
class RawExtension:
    """An extension element kept as text because no typed field claims it."""

    namespace: Optional[str]
    name: str
    text: str


@dataclass(frozen=True)
class TrackpointExtensions:
    """Extension values carried by a trackpoint (``ns3:TPX``)."""

    speed_meters_per_second: Optional[float] = None
    run_cadence: Optional[int] = None
    watts: Optional[int] = None
    raw: Tuple[RawExtension, ...] = ()

    @property
    def is_empty(self) -> bool:
        return (
            self.speed_meters_per_second is None
            and self.run_cadence is None
            and self.watts is None
            and not self.raw
        )


@dataclass(frozen=True)
class LapExtensions:
    """Extension values carried by a lap (``ns3:LX``)."""

    avg_speed: Optional[float] = None
    max_bike_cadence: Optional[int] = None
    avg_run_cadence: Optional[int] = None
    max_run_cadence: Optional[int] = None
    steps: Optional[int] = None
    avg_watts: Optional[int] = None
    max_watts: Optional[int] = None
    raw: Tuple[RawExtension, ...] = ()

    @property
    def is_empty(self) -> bool:
        return (
            all(getattr(self, name) is None for name in (
                'avg_speed', 'max_bike_cadence', 'avg_run_cadence',
                'max_run_cadence', 'steps', 'avg_watts', 'max_watts',
            ))
            and not self.raw
        )


@dataclass(frozen=True)
class Position:
    latitude_degrees: float
    longitude_degrees: float


@dataclass(frozen=True)
class Trackpoint:
    """A single timestamped sample."""

    time: datetime
    position: Optional[Position] = None
    altitude_meters: Optional[float] = None
    distance_meters: Optional[float] = None
    heart_rate_bpm: Optional[int] = None
    cadence: Optional[int] = None
    sensor_state: Optional[SensorStateValue] = None
    extensions: TrackpointExtensions = field(default_factory=TrackpointExtensions)


@dataclass(frozen=True)
class Track:
    """One continuous recording segment within a lap."""

    trackpoints: Tuple[Trackpoint, ...] = ()


@dataclass(frozen=True)
class Lap:
    """A contiguous segment of an activity starting at ``start_time``."""

    start_time: datetime
    total_time_seconds: float
    distance_meters: float
    calories: int
    intensity: IntensityValue
    trigger_method: TriggerMethodValue
    maximum_speed: Optional[float] = None
    average_heart_rate_bpm: Optional[int] = None
    maximum_heart_rate_bpm: Optional[int] = None
    cadence: Optional[int] = None
    tracks: Tuple[Track, ...] = ()
    notes: Optional[str] = None
    extensions: LapExtensions = field(default_factory=LapExtensions)

    @property
    def trackpoints(self) -> Iterator[Trackpoint]:
        """Trackpoints of every track in document order."""
        for track in self.tracks:
            yield from track.trackpoints


@dataclass(frozen=True)
class Version:
    version_major: Optional[str] = None
    version_minor: Optional[str] = None
    build_major: Optional[str] = None
    build_minor: Optional[str] = None

    def as_string(self) -> str:
        """Dotted version string of the parts that are present."""
        parts = (self.version_major, self.version_minor, self.build_major, self.build_minor)
        return '.'.join(part for part in parts if part is not None)


@dataclass(frozen=True)
class Creator:
    """Device that recorded an activity."""

    name: Optional[str] = None
    unit_id: Optional[str] = None
    product_id: Optional[str] = None
    version: Optional[Version] = None


@dataclass(frozen=True)
class Build:
    version: Optional[Version] = None
    build_type: Optional[str] = None


@dataclass(frozen=True)
class Author:
    """Application that wrote the document."""

    name: Optional[str] = None
    build: Optional[Build] = None
    lang_id: Optional[str] = None
    part_number: Optional[str] = None


@dataclass(frozen=True)
class Activity:
    """One recorded exercise session."""

    sport: SportValue
    id: datetime
    laps: Tuple[Lap, ...] = ()
    notes: Optional[str] = None
    creator: Optional[Creator] = None
    extensions: Tuple[RawExtension, ...] = ()

    @property
    def trackpoints(self) -> Iterator[Trackpoint]:
        """Trackpoints of every lap in document order."""
        for lap in self.laps:
            yield from lap.trackpoints


@dataclass(frozen=True)
class Activities:
    activities: Tuple[Activity, ...] = ()


@dataclass(frozen=True)
class Document:
    """Root of a TCX file (``<TrainingCenterDatabase>``)."""

    activities: Optional[Activities] = None
    author: Optional[Author] = None
