"""Order placement — command and handler."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from dispatch.domain import dispatch
from dispatch.order.order import Order


@dispatch.command(part_of="Order")
class PlaceOrder:
    """Place a retailer's order with a wholesaler."""

    order_id = Identifier()
    retailer_id = Identifier(required=True)
    wholesaler_id = Identifier(required=True)
    retailer_name = String(max_length=200)
    items = Text(required=True)  # JSON list of item dicts


@dispatch.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        order = Order.place(
            retailer_id=command.retailer_id,
            wholesaler_id=command.wholesaler_id,
            items_data=items_data,
            retailer_name=command.retailer_name,
            order_id=command.order_id,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
