from itinerary_share.utils.helpers import get_summary, host, utc_timestamp

__all__ = ["get_summary", "host", "utc_timestamp"]
