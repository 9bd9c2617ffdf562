"""Catalog discovery tools: search, details, reviews, comparison, recommendations."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from concierge import ui
from concierge.planner.types import Operation
from concierge.shop.models import SearchFilters
from concierge.tools.base import ProductIdParams, Tool, ToolContext, ToolParams, ToolResponse


class SearchParams(ToolParams):
    search_term: str
    filters: SearchFilters | None = None


class CompareParams(ToolParams):
    product_ids: list[str] = Field(min_length=1)


class RecommendationParams(ProductIdParams):
    limit: int = Field(default=3, ge=1, le=20)

    @field_validator("limit", mode="before")
    @classmethod
    def _default_missing_limit(cls, value: Any) -> Any:
        return 3 if value in (None, 0, "") else value


class SearchProductsTool(Tool[SearchParams]):
    """Search the catalog by keyword with optional price, rating and sort filters."""

    name = Operation.SEARCH_PRODUCTS
    params_model = SearchParams

    async def execute(self, context: ToolContext, params: SearchParams) -> ToolResponse:
        results = self.storefront.search_products(context.session, params.search_term, params.filters)
        data = [product.to_payload() for product in results]
        if not results:
            return ToolResponse(content=ui.message_box("No products found matching your search.", "info"), data=data)

        title = f"{ui.ICONS['search']} Found {len(results)} products"
        return ToolResponse(content=ui.product_list(title, results), data=data)


class GetProductDetailsTool(Tool[ProductIdParams]):
    """Show full details for one product id."""

    name = Operation.GET_PRODUCT_DETAILS
    params_model = ProductIdParams

    async def execute(self, context: ToolContext, params: ProductIdParams) -> ToolResponse:
        product = self.storefront.get_product_details(context.session, params.product_id)
        return ToolResponse(content=ui.product_details(product), data=product.to_payload())


class GetProductReviewsTool(Tool[ProductIdParams]):
    """List customer reviews for a product id."""

    name = Operation.GET_PRODUCT_REVIEWS
    params_model = ProductIdParams

    async def execute(self, context: ToolContext, params: ProductIdParams) -> ToolResponse:
        reviews = self.storefront.get_product_reviews(params.product_id)
        return ToolResponse(
            content=ui.reviews_summary(reviews),
            data=[review.to_payload() for review in reviews],
        )


class CompareProductsTool(Tool[CompareParams]):
    """Compare several products side by side."""

    name = Operation.COMPARE_PRODUCTS
    params_model = CompareParams

    async def execute(self, context: ToolContext, params: CompareParams) -> ToolResponse:
        products = self.storefront.compare_products(context.session, params.product_ids)
        return ToolResponse(
            content=ui.comparison_table(products),
            data=[product.to_payload() for product in products],
        )


class GetRecommendationsTool(Tool[RecommendationParams]):
    """Suggest similarly priced, highly rated products."""

    name = Operation.GET_RECOMMENDATIONS
    params_model = RecommendationParams

    async def execute(self, context: ToolContext, params: RecommendationParams) -> ToolResponse:
        products = self.storefront.get_recommendations(context.session, params.product_id, params.limit)
        return ToolResponse(
            content=ui.product_list(f"{ui.ICONS['sparkle']} Recommended for You", products),
            data=[product.to_payload() for product in products],
        )
