import math

EARTH_RADIUS_M = 6371000


def haversine_m(lat1, lng1, lat2, lng2):
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def has_location(lat, lng) -> bool:
    return lat is not None and lng is not None


def within_radius(distance_m: float, radius_m: float) -> bool:
    # inclusive: exactly radius_m is admitted
    return distance_m <= radius_m
