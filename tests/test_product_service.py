"""
Catalog API: Product Service Unit Tests
=========================================

What:  Tests for ProductService with a mocked session and category lookups.

What we test:
    ✅ Create resolves the category by name and stores its id
    ✅ Create under an unknown category name raises NotFoundError, adds nothing
    ✅ Scoped update with a missing category raises before any UPDATE
    ✅ Scoped update with an existing category acknowledges even on no match
    ✅ Get by unknown id yields an empty list
    ✅ Delete of an unknown product raises NotFoundError
    ✅ Detail serialization expands the category, or null for orphans
"""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from catalog.exceptions import NotFoundError
from catalog.models.product import Product
from catalog.schemas.product import ProductCreate, ProductDetailResponse
from catalog.services.product_service import PRODUCT_UPDATED_MESSAGE, ProductService


class TestProductServiceCreate:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_create_product_references_category_id(self, mock_db_session, sample_category):
        with patch("catalog.services.product_service.category_service") as mock_categories:
            mock_categories.find_category_by_name = AsyncMock(return_value=sample_category)

            def assign_id(product):
                product.id = uuid.uuid4()

            mock_db_session.add = MagicMock(side_effect=assign_id)

            result = await self.service.create_product(
                mock_db_session,
                ProductCreate(name="Chips", description="Salted", price=1.5, category="Snacks"),
            )

        assert result.category == sample_category.id
        assert result.name == "Chips"
        assert result.price == 1.5
        mock_categories.find_category_by_name.assert_awaited_once_with(mock_db_session, "Snacks")
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_product_unknown_category(self, mock_db_session):
        with patch("catalog.services.product_service.category_service") as mock_categories:
            mock_categories.find_category_by_name = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError) as exc_info:
                await self.service.create_product(
                    mock_db_session,
                    ProductCreate(name="Chips", price=1.5, category="Nope"),
                )

        assert exc_info.value.context["name"] == "Nope"
        mock_db_session.add.assert_not_called()


class TestProductServiceScopedUpdate:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_missing_category_is_not_found(self, mock_db_session):
        with patch("catalog.services.product_service.category_service") as mock_categories:
            mock_categories.find_category = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError):
                await self.service.update_product_in_category(
                    mock_db_session, uuid.uuid4(), uuid.uuid4(), {"price": 9.99}
                )

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_existing_category_acknowledges_without_match(
        self, mock_db_session, sample_category
    ):
        mock_db_session.execute.return_value = MagicMock(rowcount=0)

        with patch("catalog.services.product_service.category_service") as mock_categories:
            mock_categories.find_category = AsyncMock(return_value=sample_category)

            result = await self.service.update_product_in_category(
                mock_db_session, sample_category.id, uuid.uuid4(), {"price": 9.99}
            )

        assert result.message == PRODUCT_UPDATED_MESSAGE
        mock_db_session.execute.assert_awaited_once()
        sql = str(mock_db_session.execute.await_args.args[0])
        assert "products.category_id" in sql


class TestProductServiceReadDelete:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_get_unknown_product_is_empty_list(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_product(mock_db_session, uuid.uuid4())

        assert result == []

    @pytest.mark.asyncio
    async def test_delete_unknown_product(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError):
            await self.service.delete_product(mock_db_session, uuid.uuid4())

        mock_db_session.delete.assert_not_awaited()


class TestProductDetailResponse:

    def test_category_is_expanded(self, sample_category):
        product = MagicMock(spec=Product)
        product.id = uuid.uuid4()
        product.name = "Chips"
        product.description = None
        product.price = 2.0
        product.category = sample_category

        detail = ProductDetailResponse.from_product(product)

        assert detail.category is not None
        assert detail.category.id == sample_category.id
        assert detail.category.name == "Snacks"

    def test_orphaned_product_has_null_category(self):
        product = MagicMock(spec=Product)
        product.id = uuid.uuid4()
        product.name = "Lost"
        product.description = None
        product.price = None
        product.category = None

        assert ProductDetailResponse.from_product(product).category is None
