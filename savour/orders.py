"""Order status vocabulary.

Statuses are free strings. ``STATUS_OPTIONS`` is what the dropdown offers, in
order; any of them may be chosen regardless of the current one. Older rows may
still hold legacy spellings, which are mapped for display through
``STATUS_ALIASES`` and can be rewritten once with ``normalize_status``.
"""

PENDING = 'pending_confirmation'
PREPARING = 'Being Prepared'
READY = 'Ready for pickup'
OUT_FOR_DELIVERY = 'Out for delivery'
COMPLETED = 'Delivered/completed'

STATUS_OPTIONS = [PENDING, PREPARING, READY, OUT_FOR_DELIVERY, COMPLETED]

# lower-cased legacy value -> canonical value
STATUS_ALIASES = {
    'pending': PENDING,
    'confirmed': PENDING,
    'being prepared/cooking': PREPARING,
    'out for delivery/picked up': OUT_FOR_DELIVERY,
    'delivered': COMPLETED,
    'completed': COMPLETED,
}

STATUS_COLORS = {
    PENDING: '#f59e0b',
    PREPARING: '#3b82f6',
    READY: '#fbbf24',
    OUT_FOR_DELIVERY: '#8b5cf6',
    COMPLETED: '#10b981',
}

DEFAULT_COLOR = '#6b7280'
DEFAULT_DESCRIPTION = 'Track your order progress here.'


def canonical_status(status):
    """Canonical spelling for ``status``, or None if it is not recognised."""
    if not status:
        return None
    lowered = status.strip().lower()
    for option in STATUS_OPTIONS:
        if option.lower() == lowered:
            return option
    return STATUS_ALIASES.get(lowered)


def status_color(status):
    return STATUS_COLORS.get(canonical_status(status), DEFAULT_COLOR)


def is_completed(status):
    return canonical_status(status) == COMPLETED


def status_description(order):
    return order.status_description or DEFAULT_DESCRIPTION


def normalize_status(status):
    """Value a stored status should be rewritten to, or None to leave it."""
    canonical = canonical_status(status)
    if canonical and canonical != status:
        return canonical
    return None
