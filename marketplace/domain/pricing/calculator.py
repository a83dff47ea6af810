"""Total price from an ordered list of price mods"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


def resolve_base_price(price_mods: list) -> Optional[float]:
    """First BASE_PRICE in resolved order wins; lower precedence sources are shadowed"""
    for mod in price_mods:
        if mod.type == "BASE_PRICE":
            return float(mod.value)
    return None


def calculate_price(price_mods: list) -> float:
    """
    Fold sorted price mods into a single price.

    PERCENT mods are a percentage of the base price. BASE_MOD, FEE and TAX
    add to the total; ADDONs are optional extras and not part of it.
    """
    base_price = resolve_base_price(price_mods) or 0.0
    modifiers = 0.0
    fees = 0.0
    taxes = 0.0

    for mod in price_mods:
        if mod.type in ("BASE_PRICE", "ADDON"):
            continue

        value = base_price * (mod.value / 100) if mod.unit == "PERCENT" else float(mod.value)

        if mod.type == "BASE_MOD":
            modifiers += value
        elif mod.type == "FEE":
            fees += value
        elif mod.type == "TAX":
            taxes += value
        else:
            logger.debug(f"Ignoring price mod {mod.id} with legacy type {mod.type}")

    return base_price + modifiers + fees + taxes
