"""Product CRUD and name search."""

from __future__ import annotations

import logging
from dataclasses import replace

from shopapi.core.metrics import ServiceMetrics
from shopapi.domain.models import Product
from shopapi.repositories.sql_repository import ProductRepository
from shopapi.services.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, repository: ProductRepository, metrics: ServiceMetrics) -> None:
        self.repository = repository
        self.metrics = metrics

    def list_products(self) -> list[Product]:
        self.metrics.record_request()
        return self.repository.find_all()

    def get_product(self, product_id: int) -> Product:
        self.metrics.record_request()
        return self._require(product_id)

    def search_products(self, name: str) -> list[Product]:
        self.metrics.record_request()
        return self.repository.find_by_name_containing_ignore_case(name)

    def create_product(self, product: Product) -> Product:
        self.metrics.record_request()
        saved = self.repository.save(replace(product, id=None))
        self.metrics.record_created()
        logger.info("Created product %s (%s)", saved.id, saved.name)
        return saved

    def update_product(self, product_id: int, changes: Product) -> Product:
        self.metrics.record_request()
        current = self._require(product_id)
        updated = replace(
            current,
            name=changes.name,
            description=changes.description,
            price=changes.price,
            stock=changes.stock,
        )
        saved = self.repository.save(updated)
        logger.info("Updated product %s", saved.id)
        return saved

    def delete_product(self, product_id: int) -> None:
        self.metrics.record_request()
        current = self._require(product_id)
        self.repository.delete(current)
        logger.info("Deleted product %s", product_id)

    def _require(self, product_id: int) -> Product:
        product = self.repository.find_by_id(product_id)
        if product is None:
            logger.info("Product %s not found", product_id)
            raise ResourceNotFoundError("Product", product_id)
        return product
