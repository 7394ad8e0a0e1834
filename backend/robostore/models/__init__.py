from robostore.models.product import Category, Product

__all__ = ["Category", "Product"]
