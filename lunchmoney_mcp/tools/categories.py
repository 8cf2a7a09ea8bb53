"""Category and category group tools."""

from enum import Enum
from typing import List, Optional

import httpx
from mcp.server.fastmcp import Context
from pydantic import BaseModel, ConfigDict, Field

from lunchmoney_mcp.app import api_delete, api_get, api_post, api_put, compact, format_response, handle_error, mcp
from lunchmoney_mcp.response import (
    ResponseFormat,
    ResponseFormatField,
    ResponseMode,
    ResponseModeField,
    serialize,
)


class CategoryListFormat(str, Enum):
    FLATTENED = "flattened"
    NESTED = "nested"


class GetAllCategoriesInput(BaseModel):
    """Input for listing categories."""

    format: CategoryListFormat = Field(
        default=CategoryListFormat.FLATTENED,
        description=(
            "Can either flattened or nested. If flattened, returns a singular array of categories, "
            "ordered alphabetically. If nested, returns top-level categories (either category groups "
            "or categories not part of a category group) in an array. Subcategories are nested within "
            "the category group under the property children."
        ),
    )
    response_format: ResponseFormatField = ResponseFormat.JSON
    response_mode: ResponseModeField = ResponseMode.INLINE


class GetSingleCategoryInput(BaseModel):
    """Input for fetching one category."""
    model_config = ConfigDict(str_strip_whitespace=True)

    category_id: str = Field(
        ...,
        description="Id of the category to query. Should call the get_all_categories tool first to get the ids.",
        min_length=1,
    )


class CategoryProperties(BaseModel):
    """Properties shared by categories and category groups."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., description="Name of category. Must be between 1 and 40 characters.",
                      min_length=1, max_length=40)
    description: str = Field(default="", description="Description of category. Must be less than 140 characters.",
                             max_length=140)
    is_income: bool = Field(
        default=False,
        description="Whether or not transactions in this category should be treated as income.",
    )
    exclude_from_budget: bool = Field(
        default=False,
        description="Whether or not transactions in this category should be excluded from budgets.",
    )
    exclude_from_totals: bool = Field(
        default=False,
        description="Whether or not transactions in this category should be excluded from calculated totals.",
    )


class CreateCategoryInput(CategoryProperties):
    """Input for creating a category."""

    archived: bool = Field(default=False, description="Whether or not category should be archived.")
    group_id: Optional[int] = Field(
        default=None, description="Assigns the newly-created category to an existing category group."
    )


class UpdateCategoryInput(CreateCategoryInput):
    """Input for updating a category or category group."""

    category_id: str = Field(
        ...,
        description=(
            "Id of the category or category group to update. "
            "Execute the get_all_categories tool first, to get the category ids."
        ),
        min_length=1,
    )


class GroupMembers(BaseModel):
    category_ids: Optional[List[int]] = Field(
        default=None, description="Array of category_id to include in the category group."
    )
    new_categories: Optional[List[str]] = Field(
        default=None,
        description=(
            "Array of strings representing new categories to create "
            "and subsequently include in the category group."
        ),
    )

    def member_fields(self):
        # Empty lists are left out entirely.
        return compact(
            category_ids=self.category_ids or None,
            new_categories=self.new_categories or None,
        )


class CreateCategoryGroupInput(CategoryProperties, GroupMembers):
    """Input for creating a category group."""


class AddToCategoryGroupInput(GroupMembers):
    """Input for adding categories to a group."""

    group_id: int = Field(..., description="Id of the parent group to add to.")


class DeleteCategoryInput(BaseModel):
    """Input for deleting a category or category group."""

    category_id: int = Field(..., description="Id of the category or the category group to delete.")


def _category_body(params: CreateCategoryInput):
    return compact(
        name=params.name,
        description=params.description,
        is_income=params.is_income,
        exclude_from_budget=params.exclude_from_budget,
        exclude_from_totals=params.exclude_from_totals,
        archived=params.archived,
        group_id=params.group_id,
    )


@mcp.tool(
    name="get_all_categories",
    annotations={
        "title": "Get All Categories",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_all_categories(params: GetAllCategoriesInput, ctx: Context) -> str:
    """Get a flattened list of all categories in alphabetical order associated with the user's account."""
    try:
        data = await api_get(ctx, "/categories", {"format": params.format.value})
    except httpx.HTTPError as e:
        return handle_error(e, "get all categories")

    categories = data.get("categories", data) if isinstance(data, dict) else data
    return format_response(
        ctx, categories, params.response_format, params.response_mode,
        tool_name="categories", summary=f"{len(categories)} categories",
    )


@mcp.tool(
    name="get_single_category",
    annotations={
        "title": "Get Single Category",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_single_category(params: GetSingleCategoryInput, ctx: Context) -> str:
    """Get hydrated details on a single category.

    Note that if this category is part of a category group, its properties
    (is_income, exclude_from_budget, exclude_from_totals) will inherit from
    the category group.
    """
    try:
        category = await api_get(ctx, f"/categories/{params.category_id}")
    except httpx.HTTPError as e:
        return handle_error(e, "get single category")
    return serialize(category)


@mcp.tool(
    name="create_category",
    annotations={
        "title": "Create Category",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def create_category(params: CreateCategoryInput, ctx: Context) -> str:
    """Create a single category."""
    try:
        category = await api_post(ctx, "/categories", json_body=_category_body(params))
    except httpx.HTTPError as e:
        return handle_error(e, "create a single category")
    return serialize(category)


@mcp.tool(
    name="create_category_group",
    annotations={
        "title": "Create Category Group",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def create_category_group(params: CreateCategoryGroupInput, ctx: Context) -> str:
    """Create a single category group."""
    body = {
        "name": params.name,
        "description": params.description,
        "is_income": params.is_income,
        "exclude_from_budget": params.exclude_from_budget,
        "exclude_from_totals": params.exclude_from_totals,
        **params.member_fields(),
    }
    try:
        result = await api_post(ctx, "/categories/group", json_body=body)
    except httpx.HTTPError as e:
        return handle_error(e, "create a single category group")
    return serialize(result)


@mcp.tool(
    name="update_category",
    annotations={
        "title": "Update Category",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def update_category(params: UpdateCategoryInput, ctx: Context) -> str:
    """Update the properties for a single category or category group."""
    try:
        result = await api_put(ctx, f"/categories/{params.category_id}", json_body=_category_body(params))
    except httpx.HTTPError as e:
        return handle_error(e, "update a single category")
    return serialize(result)


@mcp.tool(
    name="add_to_category_group",
    annotations={
        "title": "Add to Category Group",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def add_to_category_group(params: AddToCategoryGroupInput, ctx: Context) -> str:
    """Add categories (either existing or new) to a single category group."""
    try:
        result = await api_post(ctx, f"/categories/group/{params.group_id}/add", json_body=params.member_fields())
    except httpx.HTTPError as e:
        return handle_error(e, "add to a single category group")
    return serialize(result)


@mcp.tool(
    name="delete_category",
    annotations={
        "title": "Delete Category",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def delete_category(params: DeleteCategoryInput, ctx: Context) -> str:
    """Delete a single category or category group.

    This will only work if there are no dependencies, such as existing budgets
    for the category, categorized transactions, categorized recurring items,
    etc. If there are dependents, the response lists what they are and how
    many there are.
    """
    try:
        result = await api_delete(ctx, f"/categories/{params.category_id}")
    except httpx.HTTPError as e:
        return handle_error(e, "delete a single category or category group")
    return serialize(result)


@mcp.tool(
    name="force_delete_category",
    annotations={
        "title": "Force Delete Category",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def force_delete_category(params: DeleteCategoryInput, ctx: Context) -> str:
    """Delete a category or category group and disassociate it from everything.

    Transactions, recurring items, budgets, etc. lose the category. Try
    delete_category first to avoid deleting data by accident. This is
    irreversible!
    """
    try:
        result = await api_delete(ctx, f"/categories/{params.category_id}/force")
    except httpx.HTTPError as e:
        return handle_error(e, "force delete a single category or category group")
    return serialize(result)
