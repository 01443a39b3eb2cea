from catalog_dashboard.client.state import AppState, LoadSequencer, PaginationState


def _response(ids, page=1, limit=15, total=None):
    total = len(ids) if total is None else total
    pages = -(-total // limit)
    return {
        "data": [{"id": i} for i in ids],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": pages,
            "hasNext": page < pages,
            "hasPrev": page > 1,
        },
    }


def test_item_range():
    pagination = PaginationState(page=3, limit=10, total=25, total_pages=3)
    assert (pagination.start_item, pagination.end_item) == (21, 25)


def test_summary_hidden_when_empty():
    assert PaginationState().summary() is None


def test_summary_controls():
    summary = PaginationState(page=1, limit=15, total=40, total_pages=3, has_next=True).summary()
    assert summary["text"] == "Mostrando 1-15 de 40 itens"
    assert summary["pages_text"] == "Página 1 de 3"
    assert not summary["can_first"] and not summary["can_prev"]
    assert summary["can_next"] and summary["can_last"]


def test_apply_page_replaces_rows_and_pagination_together():
    state = AppState()
    state.apply_page("services", _response(["a", "b"], page=2, limit=2, total=5))
    assert [r["id"] for r in state.services.rows] == ["a", "b"]
    assert state.services.pagination.page == 2
    assert state.services.pagination.total_pages == 3
    assert state.counts["services"] == 5


def test_apply_page_accepts_a_plain_list():
    state = AppState()
    state.apply_page("prices", [{"id": "p1"}, {"id": "p2"}])
    assert state.prices.pagination.total == 2
    assert state.prices.pagination.total_pages == 1


def test_set_limit_resets_page():
    state = AppState()
    state.apply_page("services", _response(["a"], page=3, limit=15, total=40))
    state.set_limit("services", 50)
    assert state.services.pagination.limit == 50
    assert state.services.pagination.page == 1


def test_reset_page_empties_rows_and_pagination_together():
    state = AppState()
    state.apply_page("services", _response(["a", "b"], page=2, limit=2, total=5))

    state.reset_page("services")

    pagination = state.services.pagination
    assert state.services.rows == []
    assert (pagination.page, pagination.limit) == (2, 2)
    assert pagination.total == 0 and pagination.total_pages == 0
    assert not pagination.has_next and not pagination.has_prev
    assert pagination.summary() is None


def test_load_sequencer_latest_wins():
    sequencer = LoadSequencer()
    first = sequencer.next()
    second = sequencer.next()
    assert not sequencer.is_current(first)
    assert sequencer.is_current(second)
