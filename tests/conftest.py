import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Make the project root importable when running from the tests directory
sys.path.insert(0, str(Path(__file__).parent.parent))

from tcxcodec.models import (
    Activities,
    Activity,
    Author,
    Build,
    Creator,
    Document,
    Intensity,
    Lap,
    LapExtensions,
    Position,
    SensorState,
    Sport,
    Track,
    Trackpoint,
    TrackpointExtensions,
    TriggerMethod,
    Version,
)

SAMPLES_DIR = Path(__file__).parent / "samples"

TCX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<TrainingCenterDatabase'
    ' xmlns="http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2"'
    ' xmlns:ns3="http://www.garmin.com/xmlschemas/ActivityExtension/v2">'
)


def wrap_activities(activities_xml: str) -> bytes:
    """Wrap Activity elements in a TCX root."""
    return (TCX_HEADER + "<Activities>" + activities_xml + "</Activities></TrainingCenterDatabase>").encode("utf-8")


def make_activity(laps_xml: str, sport: str = "Running", activity_id: str = "2021-01-19T12:00:00Z") -> str:
    id_xml = f"<Id>{activity_id}</Id>" if activity_id is not None else ""
    return f'<Activity Sport="{sport}">{id_xml}{laps_xml}</Activity>'


def make_lap(tracks_xml: str = "", total_time: str = "60.0", start: str = "2021-01-19T12:00:00Z", extra: str = "") -> str:
    return (
        f'<Lap StartTime="{start}">'
        f"<TotalTimeSeconds>{total_time}</TotalTimeSeconds>"
        "<DistanceMeters>100.0</DistanceMeters>"
        "<Calories>10</Calories>"
        "<Intensity>Active</Intensity>"
        "<TriggerMethod>Manual</TriggerMethod>"
        f"{tracks_xml}{extra}"
        "</Lap>"
    )


def make_trackpoint(time: str = "2021-01-19T12:00:00Z", body: str = "") -> str:
    return f"<Trackpoint><Time>{time}</Time>{body}</Trackpoint>"


@pytest.fixture
def sample_path():
    return SAMPLES_DIR / "virtual_ride_with_power.tcx"


@pytest.fixture
def sample_bytes(sample_path):
    return sample_path.read_bytes()


@pytest.fixture
def typed_document():
    """A document built only from typed constructors."""
    utc = timezone.utc
    plus_two = timezone(timedelta(hours=2))
    start = datetime(2021, 1, 19, 12, 0, 0, tzinfo=utc)

    first_track = Track(trackpoints=(
        Trackpoint(
            time=start,
            position=Position(latitude_degrees=48.1351, longitude_degrees=11.582),
            altitude_meters=-3.5,
            distance_meters=0.0,
            heart_rate_bpm=101,
            cadence=80,
            sensor_state=SensorState.PRESENT,
            extensions=TrackpointExtensions(speed_meters_per_second=3.5, watts=250, run_cadence=90),
        ),
        Trackpoint(time=start + timedelta(seconds=1, microseconds=250000)),
    ))
    second_track = Track(trackpoints=(
        Trackpoint(time=datetime(2021, 1, 19, 14, 0, 5, tzinfo=plus_two), distance_meters=12.75),
    ))

    lap = Lap(
        start_time=start,
        total_time_seconds=65.25,
        distance_meters=212.5,
        calories=14,
        intensity=Intensity.ACTIVE,
        trigger_method=TriggerMethod.DISTANCE,
        maximum_speed=4.1,
        average_heart_rate_bpm=120,
        maximum_heart_rate_bpm=150,
        cadence=85,
        tracks=(first_track, second_track),
        notes="first lap",
        extensions=LapExtensions(avg_speed=3.27, steps=180, avg_watts=200, max_watts=320),
    )
    resting_lap = Lap(
        start_time=start + timedelta(minutes=2),
        total_time_seconds=0.0,
        distance_meters=0.0,
        calories=0,
        intensity=Intensity.RESTING,
        trigger_method=TriggerMethod.HEART_RATE,
    )

    activity = Activity(
        sport=Sport.RUNNING,
        id=start,
        laps=(lap, resting_lap),
        notes="Easy run",
        creator=Creator(
            name="Forerunner 945",
            unit_id="3990000000",
            product_id="3113",
            version=Version(version_major="9", version_minor="20"),
        ),
    )
    author = Author(
        name="Connect Api",
        build=Build(version=Version("0", "0", "0", "0"), build_type="Release"),
        lang_id="en",
        part_number="006-D2449-00",
    )
    return Document(activities=Activities(activities=(activity,)), author=author)
