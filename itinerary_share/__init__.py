from itinerary_share.main import app

__all__ = ["app"]
