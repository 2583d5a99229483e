"""Price formatting for Steam price overviews."""

from steam_client.contracts import PriceOverview

FREE_TO_PLAY = "Free to Play"


def format_price(price_overview: PriceOverview) -> str:
    """
    Format a price overview for display.

    Uses Steam's pre-formatted final price, falling back to
    "<amount> <currency>" when the API left it empty.

    Example:
        >>> format_price(PriceOverview(currency="USD", initial=5999, final=5999,
        ...     final_formatted="$59.99"))
        '$59.99'
    """
    if price_overview.final_formatted:
        return price_overview.final_formatted
    return f"{price_overview.final_dollars:.2f} {price_overview.currency}"


def format_free() -> str:
    """Display string for free-to-play games."""
    return FREE_TO_PLAY
