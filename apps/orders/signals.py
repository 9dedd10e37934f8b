from django.dispatch import Signal

# Sent inside the completion transaction, before the order is marked
# complete. Receivers raising an exception abort the completion.
order_completing = Signal()
