"""HTTP surface for the itinerary map generator."""
