import pytest

from catalog_dashboard.client.forms import (
    FormMode,
    FormValidationError,
    PriceEditor,
    ServiceEditor,
    parse_float,
    parse_int,
)


def test_number_parsing_follows_form_rules():
    assert parse_int("42abc", 0) == 42
    assert parse_int("abc", 0) == 0
    assert parse_int("", 1) == 1
    assert parse_int("0", 1) == 1
    assert parse_float("10.5", 0) == 10.5
    assert parse_float("x", 0) == 0


def _fill_service(editor):
    for name, value in {
        "id": "svc1",
        "codigo": "7",
        "tipo": "Assinatura",
        "servico": "Mapeamento",
        "categoria": "Drones",
        "segmento": "Agro",
    }.items():
        editor.set_field(name, value)


def test_service_editor_create_flow():
    editor = ServiceEditor()
    editor.open()
    assert editor.mode is FormMode.CREATE
    assert editor.title == "Novo Serviço"
    _fill_service(editor)
    editor.add_product({"nomeProduto": "Drone X", "preco": "1500.50", "quantidade": "abc"})
    editor.add_product()

    submission = editor.submit()

    assert submission.method == "POST"
    assert submission.endpoint == "/services"
    assert submission.payload["codigo"] == 7
    assert submission.payload["produto"] == [
        {"nomeProduto": "Drone X", "preco": 1500.5, "quantidade": 1, "descricao": ""}
    ]


def test_service_editor_requires_fields():
    editor = ServiceEditor()
    editor.open()
    editor.set_field("id", "svc1")
    with pytest.raises(FormValidationError) as excinfo:
        editor.submit()
    assert excinfo.value.missing == ["tipo", "servico", "categoria", "segmento"]


def test_service_editor_edit_keeps_id():
    record = {
        "id": "svc/1",
        "codigo": 3,
        "tipo": "T",
        "servico": "S",
        "categoria": "C",
        "segmento": "G",
        "produto": [{"nomeProduto": "P", "preco": 2, "quantidade": 4}],
    }
    editor = ServiceEditor()
    editor.open(record)
    assert editor.is_editing
    assert editor.title == "Editar Serviço"
    assert len(editor.products) == 1

    editor.set_field("id", "changed")
    editor.set_field("servico", "Novo nome")
    submission = editor.submit()

    assert submission.method == "PUT"
    assert submission.endpoint == "/services/svc%2F1"
    assert submission.payload["id"] == "svc/1"
    assert submission.payload["servico"] == "Novo nome"
    assert submission.payload["produto"][0]["quantidade"] == 4


def test_close_discards_the_form():
    editor = ServiceEditor()
    editor.open({"id": "svc1", "tipo": "T"})
    editor.close()
    assert not editor.is_open
    assert editor.fields == {} and editor.products == []
    with pytest.raises(RuntimeError):
        editor.submit()


def test_price_editor_serializes_non_blank_values():
    editor = PriceEditor()
    editor.open({"id": "p1", "code": "SKU", "um": "UN", "prices": {"HML": {"SP": "10"}}})
    assert editor.active_env == "HML"
    assert editor.visible_inputs()["SP"] == "10"

    editor.select_env("PRD")
    editor.set_price("PRD", "RJ", "  12.50 ")
    editor.set_price("HML", "SP", "")

    payload = editor.submit().payload
    assert payload["prices"] == {"HML": {}, "PRD": {"RJ": "12.50"}}


def test_price_editor_rejects_unknown_env_and_region():
    editor = PriceEditor()
    editor.open()
    assert editor.title == "Novo Preço"
    with pytest.raises(ValueError):
        editor.select_env("DEV")
    with pytest.raises(KeyError):
        editor.set_price("HML", "XX", "1")
