"""
Price modification precedence

Where a price mod is attached decides its source, and the source, type and
value decide the order mods are displayed and applied in. All ranks live on
PriceModOrdering so a new type or attachment level is a one-line change.
"""

SOURCE_INSTANCE = "instance"
SOURCE_RETREAT = "retreat"
SOURCE_PROGRAM = "program"
SOURCE_PROPERTY = "property"


def derive_source(price_mod) -> str:
    """Attachment level of a price mod row: instance > retreat/program > property"""
    if price_mod.retreat_instance_id or price_mod.program_instance_id:
        return SOURCE_INSTANCE
    if price_mod.retreat_id:
        return SOURCE_RETREAT
    if price_mod.program_id:
        return SOURCE_PROGRAM
    return SOURCE_PROPERTY


class PriceModOrdering:
    """Sort policy: source rank, then type rank, then value (largest first)"""

    source_rank = {
        SOURCE_INSTANCE: 0,
        SOURCE_RETREAT: 1,
        SOURCE_PROGRAM: 1,
        SOURCE_PROPERTY: 2,
    }
    type_rank = {
        "BASE_PRICE": 0,
        "BASE_MOD": 1,
        "ADDON": 2,
        "FEE": 3,
        "TAX": 4,
    }
    unknown_type_rank = 99

    def key(self, price_mod) -> tuple:
        return (
            self.source_rank[price_mod.source],
            self.type_rank.get(price_mod.type, self.unknown_type_rank),
            -price_mod.value,
        )

    def sort(self, price_mods: list) -> list:
        # sorted() is stable: exact ties keep their fetch order
        return sorted(price_mods, key=self.key)


DEFAULT_ORDERING = PriceModOrdering()


def sort_price_mods(price_mods: list, ordering: PriceModOrdering = DEFAULT_ORDERING) -> list:
    return ordering.sort(price_mods)
