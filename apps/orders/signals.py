"""
Order signals
order_placed fires once per order, after the creating transaction commits.
Receivers get the saved Order as the ``order`` keyword argument.
"""

from django.dispatch import Signal

order_placed = Signal()
