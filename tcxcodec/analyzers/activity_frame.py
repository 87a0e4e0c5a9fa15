"""Tabular views and summaries of parsed activities."""

import logging
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from ..models.activity import Activity
from ..serializers.tcx_writer import format_enum

logger = logging.getLogger(__name__)

FRAME_COLUMNS = [
    'lap_index',
    'track_index',
    'time',
    'latitude',
    'longitude',
    'altitude_meters',
    'distance_meters',
    'heart_rate_bpm',
    'cadence',
    'sensor_state',
    'speed_meters_per_second',
    'watts',
    'run_cadence',
]


def activity_to_dataframe(activity: Activity) -> pd.DataFrame:
    """Convert an activity's trackpoints to a pandas DataFrame.

    Args:
        activity: Parsed activity

    Returns:
        DataFrame with one row per trackpoint, in document order
    """
    rows = []
    for lap_index, lap in enumerate(activity.laps):
        for track_index, track in enumerate(lap.tracks):
            for point in track.trackpoints:
                position = point.position
                rows.append({
                    'lap_index': lap_index,
                    'track_index': track_index,
                    'time': point.time,
                    'latitude': position.latitude_degrees if position else None,
                    'longitude': position.longitude_degrees if position else None,
                    'altitude_meters': point.altitude_meters,
                    'distance_meters': point.distance_meters,
                    'heart_rate_bpm': point.heart_rate_bpm,
                    'cadence': point.cadence,
                    'sensor_state': format_enum(point.sensor_state) if point.sensor_state is not None else None,
                    'speed_meters_per_second': point.extensions.speed_meters_per_second,
                    'watts': point.extensions.watts,
                    'run_cadence': point.extensions.run_cadence,
                })

    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def _stats(values: List[float]) -> Dict[str, Optional[float]]:
    if not values:
        return {'avg': None, 'max': None}
    return {'avg': float(np.mean(values)), 'max': float(np.max(values))}


def summarize_activity(activity: Activity) -> Dict[str, Any]:
    """Get a summary of an activity.

    Totals come from the laps; heart rate and power come from the samples.
    """
    points = list(activity.trackpoints)
    heart_rates = [p.heart_rate_bpm for p in points if p.heart_rate_bpm is not None]
    watts = [p.extensions.watts for p in points if p.extensions.watts is not None]

    hr = _stats(heart_rates)
    power = _stats(watts)

    summary = {
        'sport': format_enum(activity.sport),
        'start_time': activity.id.isoformat(),
        'lap_count': len(activity.laps),
        'trackpoint_count': len(points),
        'total_time_seconds': sum(lap.total_time_seconds for lap in activity.laps),
        'distance_meters': sum(lap.distance_meters for lap in activity.laps),
        'calories': sum(lap.calories for lap in activity.laps),
        'avg_heart_rate': hr['avg'],
        'max_heart_rate': hr['max'],
        'avg_power': power['avg'],
        'max_power': power['max'],
        'has_power_data': any(w > 0 for w in watts),
    }
    logger.debug(f"Summarized activity {summary['start_time']}: {summary['trackpoint_count']} trackpoints")
    return summary
