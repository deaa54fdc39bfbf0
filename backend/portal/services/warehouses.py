from portal.schemas.warehouse import Warehouse

WAREHOUSES: list[Warehouse] = [
    Warehouse(
        city="Москва (Литвиново)",
        address="141533 Московская область, Солнечногорский район, д. Шелепаново, стр. 152/2",
    ),
    Warehouse(
        city="Москва (Томилино)",
        address="140073, Россия, Московская область, городской округ Люберцы, "
        "рабочий посёлок Томилино, микрорайон Птицефабрика, к9",
    ),
    Warehouse(
        city="Москва (Чехов)",
        address="142326, МО, Чеховский район, село Новоселки, промзона Новоселки, "
        "владение 19, строение 5",
    ),
    Warehouse(
        city="г. Москва (Шолохово)",
        address="141052, Российская Федерация, Московская область, г. Мытищи, "
        "д. Шолохово, ш. Дмитровское, строение 8А",
    ),
    Warehouse(
        city="г. Алматы",
        address="Казахстан, Алматы, ул. Казыбаева, д. 3/2",
    ),
]


def match_warehouses(
    query: str, warehouses: list[Warehouse] | None = None
) -> list[tuple[int, Warehouse]]:
    """Case-insensitive substring match on city and address.

    Returns ``(index, warehouse)`` pairs in list order; the index is the
    warehouse's stable position in the list.
    """
    source = WAREHOUSES if warehouses is None else warehouses
    needle = query.lower()
    return [
        (index, w)
        for index, w in enumerate(source)
        if needle in w.city.lower() or needle in w.address.lower()
    ]
