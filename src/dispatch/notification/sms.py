"""SMS text for delivery opportunities."""

from dispatch.notification.opportunity import DeliveryOpportunity


def _fmt(value: float):
    return int(value) if float(value).is_integer() else value


def render_opportunity_sms(opportunity: DeliveryOpportunity) -> str:
    pickup = opportunity.wholesaler
    drop = opportunity.retailer
    lines = [
        "NEW DELIVERY OPPORTUNITY",
        f"Order: #{opportunity.order_id}",
        "",
        "PICKUP:",
        pickup.shop_name,
        pickup.address,
        f"Phone: {pickup.phone}" if pickup.phone else "",
        "",
        "DELIVERY:",
        drop.shop_name,
        drop.address,
        f"Phone: {drop.phone}" if drop.phone else "",
        "",
        f"Distance: {_fmt(opportunity.distance_km)} km",
        f"Delivery Fee: ₹{_fmt(opportunity.delivery_cost)}",
        f"Order Value: ₹{_fmt(opportunity.order_amount)}",
        "",
        "Login to accept this delivery!",
    ]
    return "\n".join(lines)
