from typing import Iterable, List, Sequence
from src.domain.base import generate_uuid
from src.domain.line_item import LineItem
from .dtos import LineItemInputDTO


def build_line_items(
    items: Sequence[LineItemInputDTO], existing: Iterable[LineItem] = ()
) -> List[LineItem]:
    """
    Turn validated line item inputs into entities, keeping their order

    A supplied id is kept only when it names one of the existing items of the
    same invoice, and only once; every other item gets a fresh id.
    """
    reusable = {item.id: item for item in existing}
    line_items = []
    for position, data in enumerate(items):
        line_item = reusable.pop(data.id, None) if data.id else None
        if line_item is None:
            line_item = LineItem(id=generate_uuid())
        line_item.position = position
        line_item.description = data.description
        line_item.quantity = data.quantity
        line_item.unit_price = data.unit_price
        line_item.total = data.total
        line_items.append(line_item)
    return line_items
