"""In-memory search and filters applied to already-fetched rows."""

MENU_TABS = ('all', 'food', 'drinks', 'snacks')


def matches_term(record, term, fields):
    """True if any of ``fields`` on ``record`` contains ``term``, ignoring case.

    Missing or empty field values never match; an empty term matches everything.
    """
    if not term:
        return True
    needle = term.lower()
    for field in fields:
        value = getattr(record, field, None)
        if value and needle in str(value).lower():
            return True
    return False


def search(records, term, fields=('name',)):
    return [r for r in records if matches_term(r, term, fields)]


def filter_menu(items, term, tab='all'):
    # search first, category tab after
    found = search(items, term, ('name',))
    if not tab or tab == 'all':
        return found
    return [item for item in found if item.category == tab]


def filter_orders(orders, company_id=None, staff_id=None):
    result = orders
    if company_id:
        result = [o for o in result if o.company_id == company_id]
    if staff_id:
        result = [o for o in result if o.waiting_staff_id == staff_id]
    return result
