from dataclasses import dataclass, replace


@dataclass
class Product:
    name: str
    price: float
    description: str = ""
    stock: int = 0
    id: int = 0

    def copy(self, **changes) -> "Product":
        # all fields are scalars, so a shallow replace is a full value copy
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "stock": self.stock,
        }
