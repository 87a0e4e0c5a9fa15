"""Analysis helpers for parsed activities."""

from .activity_frame import activity_to_dataframe, summarize_activity

__all__ = ['activity_to_dataframe', 'summarize_activity']
