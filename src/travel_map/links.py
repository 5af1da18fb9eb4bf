"""Outbound map-search links for locations."""

from urllib.parse import quote

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={query}"


def maps_search_url(name: str) -> str:
    """
    Build a Google Maps search deep link for a location name.

    Pure function of the name: the same name always yields the same URL.
    Non-ASCII names are UTF-8 percent-encoded.

    Example:
        >>> maps_search_url("Europa-Park")
        'https://www.google.com/maps/search/?api=1&query=Europa-Park'
    """
    return MAPS_SEARCH_URL.format(query=quote(name, safe=""))
