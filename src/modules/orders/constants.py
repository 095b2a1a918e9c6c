"""Order domain constants.

Orders start out ``pending``.  After that the status is free-form: an
admin may set any label the fulfilment process uses, so there is no
transition table to validate against.
"""


class OrderStatus:
    PENDING = "pending"


STATUS_MAX_LENGTH = 50

CONFIRMATION_SUBJECT = "Order Confirmation"
CONFIRMATION_BODY = (
    "Your order has been placed successfully. "
    "Order ID: {order_id}. Total Price: ${total_price}."
)

CANCELLATION_SUBJECT = "Order Cancellation"
CANCELLATION_BODY = "Your order with ID {order_id} has been cancelled."
