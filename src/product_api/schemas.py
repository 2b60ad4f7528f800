"""Pydantic models describing the JSON bodies of the product API.

Request bodies are checked by :mod:`product_api.payload`; these models are
the published contract and the source of the OpenAPI component schemas.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from .payload import INT64_MAX, INT64_MIN

Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


class ProductInput(BaseModel):
    """Body of create and update requests. Any ``id`` sent is ignored."""

    model_config = ConfigDict(title="ProductInput")

    name: str = Field(..., min_length=1, examples=["Widget"])
    description: Optional[str] = Field("", examples=["Blue, 10cm"])
    price: float = Field(..., allow_inf_nan=False, examples=[9.99])
    stock: Optional[Int64] = Field(0, examples=[5])


class ProductOut(BaseModel):
    model_config = ConfigDict(title="Product")

    id: Int64 = Field(..., description="Assigned by the server")
    name: str = Field(..., min_length=1)
    description: str = ""
    price: float
    stock: Int64 = 0


class ErrorOut(BaseModel):
    model_config = ConfigDict(title="Error")

    error: str = Field(..., examples=["product not found"])


def component_schemas() -> dict:
    ref_template = "#/components/schemas/{model}"
    return {
        "ProductInput": ProductInput.model_json_schema(ref_template=ref_template),
        "Product": ProductOut.model_json_schema(ref_template=ref_template, mode="serialization"),
        "Error": ErrorOut.model_json_schema(ref_template=ref_template, mode="serialization"),
    }
