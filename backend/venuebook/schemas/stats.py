"""
Pydantic schema for the hotel dashboard counts.
"""

from pydantic import BaseModel


class HotelStats(BaseModel):
    total_events: int
    total_bookings: int
    approved_bookings: int
