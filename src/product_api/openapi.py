"""OpenAPI description of the ``/api`` surface and the Swagger UI page."""

from .schemas import component_schemas

API_TITLE = "Product Management API"
API_VERSION = "1.0"

_ERROR = {"$ref": "#/components/schemas/Error"}
_PRODUCT = {"$ref": "#/components/schemas/Product"}
_ID_PARAM = {
    "name": "id",
    "in": "path",
    "required": True,
    "description": "Product ID",
    "schema": {"type": "integer", "format": "int64"},
}

SWAGGER_UI_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>{title}</title>
  <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/swagger-ui-dist@5/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://cdn.jsdelivr.net/npm/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>
    SwaggerUIBundle({{url: "{spec_url}", dom_id: "#swagger-ui"}});
  </script>
</body>
</html>
"""


def _json(schema: dict, description: str) -> dict:
    return {"description": description, "content": {"application/json": {"schema": schema}}}


def _body(description: str) -> dict:
    return {"required": True, "description": description,
            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/ProductInput"}}}}


def _failures(*codes: str) -> dict:
    names = {"400": "Bad Request", "404": "Not Found", "500": "Internal Server Error"}
    return {code: _json(_ERROR, names[code]) for code in codes}


def build_openapi() -> dict:
    return {
        "openapi": "3.1.0",
        "info": {
            "title": API_TITLE,
            "version": API_VERSION,
            "description": "Simple product management service.",
        },
        "servers": [{"url": "/api"}],
        "paths": {
            "/products": {
                "get": {
                    "tags": ["products"],
                    "summary": "Get all products",
                    "responses": {
                        "200": _json({"type": "array", "items": _PRODUCT}, "OK"),
                        **_failures("500"),
                    },
                },
                "post": {
                    "tags": ["products"],
                    "summary": "Create new product",
                    "requestBody": _body("Product data"),
                    "responses": {
                        "201": _json(_PRODUCT, "Created"),
                        **_failures("400", "500"),
                    },
                },
            },
            "/products/{id}": {
                "parameters": [_ID_PARAM],
                "get": {
                    "tags": ["products"],
                    "summary": "Get product by ID",
                    "responses": {
                        "200": _json(_PRODUCT, "OK"),
                        **_failures("400", "404", "500"),
                    },
                },
                "put": {
                    "tags": ["products"],
                    "summary": "Update existing product",
                    "requestBody": _body("Updated product"),
                    "responses": {
                        "200": _json(_PRODUCT, "OK"),
                        **_failures("400", "404", "500"),
                    },
                },
                "delete": {
                    "tags": ["products"],
                    "summary": "Delete product",
                    "responses": {
                        "204": {"description": "No Content"},
                        **_failures("400", "404", "500"),
                    },
                },
            },
        },
        "components": {"schemas": component_schemas()},
    }


def swagger_ui_html(spec_url: str) -> str:
    return SWAGGER_UI_HTML.format(title=API_TITLE, spec_url=spec_url)
