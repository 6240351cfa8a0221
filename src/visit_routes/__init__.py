"""Field visit route planning: visit ordering, OSRM routes and itineraries."""
