"""Service-layer exceptions."""


class LoadoutError(Exception):
    """Raised when a chosen loadout names unavailable items or overfills the backpack."""
