from itinerary_share.routes.itinerary import router as itinerary_router

__all__ = ["itinerary_router"]
