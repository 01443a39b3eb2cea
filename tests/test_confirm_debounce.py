import threading

from catalog_dashboard.client.confirm import ConfirmDialog
from catalog_dashboard.client.debounce import Debouncer


def test_confirm_runs_the_pending_callback_once():
    calls = []
    dialog = ConfirmDialog()
    dialog.show("Excluir?", lambda: calls.append("deleted"))
    assert dialog.is_open and dialog.has_pending

    dialog.confirm()
    dialog.confirm()

    assert calls == ["deleted"]
    assert not dialog.is_open


def test_show_replaces_the_previous_callback():
    calls = []
    dialog = ConfirmDialog()
    dialog.show("first", lambda: calls.append(1))
    dialog.show("second", lambda: calls.append(2))
    dialog.confirm()
    assert calls == [2]


def test_cancel_drops_the_callback():
    calls = []
    dialog = ConfirmDialog()
    dialog.show("Excluir?", lambda: calls.append(1))
    dialog.cancel()
    dialog.confirm()
    assert calls == []


def test_debouncer_runs_once_with_last_arguments():
    done = threading.Event()
    calls = []

    def record(value):
        calls.append(value)
        done.set()

    debounced = Debouncer(record, wait=0.05)
    for value in ("d", "dr", "dro"):
        debounced(value)

    assert done.wait(2)
    assert calls == ["dro"]
    assert not debounced.pending


def test_debouncer_flush_and_cancel():
    calls = []
    debounced = Debouncer(calls.append, wait=10)
    debounced("now")
    debounced.flush()
    debounced("never")
    debounced.cancel()
    assert calls == ["now"]
