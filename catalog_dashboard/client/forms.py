"""
Editor forms for services and prices.

Each editor is a small state machine.  ``open()`` without a record
enters ``create`` mode with a cleared form; ``open(record)`` enters
``edit`` mode with the form filled from the record and the backing id
fixed.  The editor leaves either mode through ``close()`` (discard) or
a successful ``submit()`` followed by ``close()``.

Form values are kept as the strings a user would type.  ``submit()``
checks the required fields, converts the values the way the HTML form
did (numbers that do not parse become 0, quantities become 1) and
returns the HTTP call to make.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from catalog_dashboard.app.schemas.price import BRAZILIAN_STATES, ENVIRONMENTS, Price
from catalog_dashboard.app.schemas.service import Product, Service


_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_int(value: Any, default: int) -> int:
    """Parse the leading integer of ``value``; ``default`` when there is none or it is 0."""
    match = _INT_PREFIX.match(str(value)) if value is not None else None
    number = int(match.group(0)) if match else 0
    return number or default


def parse_float(value: Any, default: float) -> float:
    match = _FLOAT_PREFIX.match(str(value)) if value is not None else None
    number = float(match.group(0)) if match else 0.0
    return number or default


class FormMode(Enum):
    CREATE = "create"
    EDIT = "edit"


class FormValidationError(ValueError):
    """Raised when a required field is empty."""

    def __init__(self, missing: List[str]) -> None:
        super().__init__(f"Preencha os campos obrigatórios: {', '.join(missing)}")
        self.missing = missing


@dataclass
class Submission:
    """HTTP call produced by a submitted form."""

    method: str
    endpoint: str
    payload: Dict[str, Any]
    resource_id: str

    @property
    def is_update(self) -> bool:
        return self.method == "PUT"


class Editor:
    """Common create/edit state machine."""

    resource = ""
    required_fields: tuple = ()
    text_fields: tuple = ()

    def __init__(self) -> None:
        self.is_open = False
        self.mode: Optional[FormMode] = None
        self.record_id: Optional[str] = None
        self.fields: Dict[str, str] = {}

    @property
    def is_editing(self) -> bool:
        return self.mode is FormMode.EDIT

    @property
    def title(self) -> str:
        raise NotImplementedError

    def open(self, record: Optional[Dict[str, Any]] = None) -> None:
        self.fields = {name: "" for name in self.text_fields}
        if record:
            self.mode = FormMode.EDIT
            self.record_id = str(record.get("id") or "")
            for name in self.text_fields:
                value = record.get(name)
                self.fields[name] = "" if value in (None, "") else str(value)
            self.fields["id"] = self.record_id
        else:
            self.mode = FormMode.CREATE
            self.record_id = None
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
        self.mode = None
        self.record_id = None
        self.fields = {}

    def set_field(self, name: str, value: str) -> None:
        if name not in self.fields:
            raise KeyError(name)
        if name == "id" and self.is_editing:
            # The backing id of an edited record cannot change.
            return
        self.fields[name] = value

    def validate(self) -> None:
        missing = [name for name in self.required_fields if not self.fields.get(name, "").strip()]
        if missing:
            raise FormValidationError(missing)

    def build_payload(self) -> Dict[str, Any]:
        raise NotImplementedError

    def submit(self) -> Submission:
        if not self.is_open:
            raise RuntimeError(f"The {self.resource} editor is not open")
        self.validate()
        payload = self.build_payload()
        if self.is_editing:
            payload["id"] = self.record_id
            endpoint = f"/{self.resource}/{quote(self.record_id, safe='')}"
            return Submission("PUT", endpoint, payload, self.record_id)
        return Submission("POST", f"/{self.resource}", payload, payload["id"])


class ServiceEditor(Editor):
    """Editor for service records and their product cards."""

    resource = "services"
    required_fields = ("id", "tipo", "servico", "categoria", "segmento")
    text_fields = (
        "id", "codigo", "tipo", "servico", "categoria", "subcategoria",
        "segmento", "versao", "edicao", "imagem",
    )

    def __init__(self) -> None:
        super().__init__()
        self.products: List[Dict[str, str]] = []

    @property
    def title(self) -> str:
        return "Editar Serviço" if self.is_editing else "Novo Serviço"

    def open(self, record: Optional[Dict[str, Any]] = None) -> None:
        super().open(record)
        self.products = []
        if record and isinstance(record.get("produto"), list):
            for product in record["produto"]:
                self.add_product(product)

    def close(self) -> None:
        super().close()
        self.products = []

    def add_product(self, product: Optional[Dict[str, Any]] = None) -> int:
        """Append a product card and return its index."""
        product = product or {}
        self.products.append({
            "nomeProduto": str(product.get("nomeProduto") or ""),
            "preco": str(product.get("preco") or ""),
            "quantidade": str(product.get("quantidade") or 1),
            "descricao": str(product.get("descricao") or ""),
        })
        return len(self.products) - 1

    def remove_product(self, index: int) -> None:
        del self.products[index]

    def build_payload(self) -> Dict[str, Any]:
        products = [
            Product(
                nomeProduto=card["nomeProduto"],
                preco=parse_float(card.get("preco"), 0),
                quantidade=parse_int(card.get("quantidade"), 1),
                descricao=card.get("descricao") or "",
            )
            for card in self.products
            if card.get("nomeProduto")
        ]
        service = Service(
            id=self.fields["id"],
            codigo=parse_int(self.fields.get("codigo"), 0),
            tipo=self.fields["tipo"],
            servico=self.fields["servico"],
            categoria=self.fields["categoria"],
            subcategoria=self.fields.get("subcategoria", ""),
            segmento=self.fields["segmento"],
            versao=self.fields.get("versao", ""),
            edicao=self.fields.get("edicao", ""),
            imagem=self.fields.get("imagem", ""),
            produto=products,
        )
        return service.model_dump()


class PriceEditor(Editor):
    """Editor for price records.

    One text input per region and environment; only the inputs of the
    active environment tab are shown, ``HML`` by default.
    """

    resource = "prices"
    required_fields = ("id", "code", "um")
    text_fields = ("id", "code", "um")

    def __init__(self) -> None:
        super().__init__()
        self.price_inputs: Dict[str, Dict[str, str]] = {}
        self.active_env = ENVIRONMENTS[0]

    @property
    def title(self) -> str:
        return "Editar Preço" if self.is_editing else "Novo Preço"

    def open(self, record: Optional[Dict[str, Any]] = None) -> None:
        super().open(record)
        self.price_inputs = {env: {state: "" for state in BRAZILIAN_STATES} for env in ENVIRONMENTS}
        prices = (record or {}).get("prices") or {}
        for env in ENVIRONMENTS:
            for state, value in (prices.get(env) or {}).items():
                if state in self.price_inputs[env]:
                    self.price_inputs[env][state] = "" if value is None else str(value)
        self.active_env = ENVIRONMENTS[0]

    def close(self) -> None:
        super().close()
        self.price_inputs = {}

    def select_env(self, env: str) -> None:
        if env not in ENVIRONMENTS:
            raise ValueError(f"Unknown environment: {env}")
        self.active_env = env

    def set_price(self, env: str, state: str, value: str) -> None:
        if state not in self.price_inputs.get(env, {}):
            raise KeyError(f"{env}/{state}")
        self.price_inputs[env][state] = value

    def visible_inputs(self) -> Dict[str, str]:
        return self.price_inputs.get(self.active_env, {})

    def build_payload(self) -> Dict[str, Any]:
        prices: Dict[str, Dict[str, str]] = {env: {} for env in ENVIRONMENTS}
        for env in ENVIRONMENTS:
            for state in BRAZILIAN_STATES:
                value = self.price_inputs.get(env, {}).get(state, "").strip()
                if value:
                    prices[env][state] = value
        price = Price(id=self.fields["id"], code=self.fields["code"], um=self.fields["um"], prices=prices)
        return price.model_dump()
