#!/usr/bin/env python3
"""
Synonym Tables - Declared vocabularies used to read loose lead text.

Every free-text heuristic the resolver and the fallback scorer apply is
driven by these tables, so the rules can be audited and tested on their own.
"""
from typing import Dict, FrozenSet, List, Tuple

from core.matcher.models import PropertyType, RoomHint

# Labels a lead may use for each property type (the enum value is always a label).
PROPERTY_TYPE_LABELS: Dict[PropertyType, Tuple[str, ...]] = {
    PropertyType.APARTMENT: ("apartment", "apartamento"),
    PropertyType.HOUSE: ("house", "moradia"),
    PropertyType.LAND: ("land", "terreno"),
    PropertyType.BUILDING: ("building", "prédio"),
    PropertyType.FARM: ("farm", "quinta"),
    PropertyType.STORE: ("store", "loja"),
    PropertyType.WAREHOUSE: ("warehouse", "armazém"),
    PropertyType.OFFICE: ("office", "escritório"),
}

# Room-count shorthand (Portuguese typology). T4 covers four or more bedrooms.
ROOM_SHORTHAND: Tuple[RoomHint, ...] = (
    RoomHint(token="t1", bedrooms_min=1, bedrooms_max=1),
    RoomHint(token="t2", bedrooms_min=2, bedrooms_max=2),
    RoomHint(token="t3", bedrooms_min=3, bedrooms_max=3),
    RoomHint(token="t4", bedrooms_min=4, bedrooms_max=None),
)

# Lead types that count as buying/selling interest for the listing-type factor.
BUYER_LEAD_TYPES: FrozenSet[str] = frozenset({"comprador", "parceiro_comprador", "buyer"})
SELLER_LEAD_TYPES: FrozenSet[str] = frozenset({"vendedor", "parceiro_vendedor", "seller"})


def _contains_either_way(a: str, b: str) -> bool:
    return bool(a) and bool(b) and (a in b or b in a)


def match_property_types(interest: str) -> FrozenSet[PropertyType]:
    """Property types whose labels appear in ``interest`` or contain it.

    Both sides are compared lower-cased.
    """
    text = (interest or "").strip().lower()
    if not text:
        return frozenset()
    return frozenset(
        prop_type
        for prop_type, labels in PROPERTY_TYPE_LABELS.items()
        if any(_contains_either_way(text, label) for label in labels)
    )


def match_room_hints(interest: str) -> Tuple[RoomHint, ...]:
    """Room shorthand tokens present in ``interest``, in table order."""
    text = (interest or "").strip().lower()
    if not text:
        return ()
    found: List[RoomHint] = [hint for hint in ROOM_SHORTHAND if hint.token in text]
    return tuple(found)
