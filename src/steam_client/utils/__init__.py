"""Formatting helpers."""

from steam_client.utils.price import format_free, format_price

__all__ = ["format_free", "format_price"]
