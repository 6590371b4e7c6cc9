EARTH_RADIUS_KM = 6371.01  # Mean radius according to NASA

def km_to_angle(km: float) -> float:
    """Convert a distance on the Earth's surface (km) to an angle in radians."""
    return km / EARTH_RADIUS_KM

def meters_to_angle(meters: float) -> float:
    """Convert a distance on the Earth's surface (m) to an angle in radians."""
    return km_to_angle(0.001 * meters)

def area_to_km2(steradians: float) -> float:
    """Convert an area in steradians to square kilometers."""
    return steradians * EARTH_RADIUS_KM ** 2

def area_to_m2(steradians: float) -> float:
    """Convert an area in steradians to square meters."""
    return area_to_km2(steradians) * 1e6
