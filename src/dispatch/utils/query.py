"""Reading every row a query matches, one page at a time."""

DEFAULT_PAGE_SIZE = 100


def fetch_all(query, page_size: int = DEFAULT_PAGE_SIZE) -> list:
    """Walk ``query`` with offset/limit until no page remains.

    Protean caps an unpaged query at its default page size, so a plain
    ``query.all()`` can silently drop rows.
    """
    items = []
    offset = 0
    while True:
        page = query.offset(offset).limit(page_size).all()
        items.extend(page.items)
        if not page.items or not page.has_next:
            return items
        offset += page_size
