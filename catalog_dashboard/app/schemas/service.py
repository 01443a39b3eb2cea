"""
Pydantic models for service records.

A service is identified by a user‑assigned ``id`` and carries an
ordered list of products.  ``createdAt``/``updatedAt`` are assigned by
the server on write and are therefore not part of these models.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    nomeProduto: str = Field(..., examples=["Licença anual"])
    preco: float = Field(0, examples=[199.9])
    quantidade: int = Field(1, examples=[1])
    descricao: str = Field("", examples=["Licença de uso por 12 meses"])


class Service(BaseModel):
    """A service record as edited in the dashboard."""

    id: str = Field(..., examples=["svc1"])
    codigo: int = Field(0, examples=[101])
    tipo: str = Field(..., examples=["Assinatura"])
    servico: str = Field(..., examples=["Monitoramento"])
    categoria: str = Field(..., examples=["Agricultura"])
    subcategoria: Optional[str] = ""
    segmento: str = Field(..., examples=["Pulverização"])
    versao: Optional[str] = ""
    edicao: Optional[str] = ""
    imagem: Optional[str] = ""
    produto: List[Product] = Field(default_factory=list)

    model_config = {"extra": "allow"}
