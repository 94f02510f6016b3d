"""
Platform administration API routes.

- PUT /api/v1/settings/{key} - Change a platform setting
- PATCH /api/v1/products/{product_id} - List or hide a product
- DELETE /api/v1/products/{product_id} - Delete a product
- GET /api/v1/sellers - List sellers
"""

from fastapi import APIRouter, status

from campus_console.api.dependencies import PrivilegedConsole
from campus_console.application.dto.platform_dto import (
    ProductOutput,
    ProductUpdateInput,
    SellerOutput,
    SettingOutput,
    SettingUpdateInput,
)

router = APIRouter(tags=["Platform"])


@router.put("/settings/{key}", response_model=SettingOutput, summary="Update platform setting")
async def update_setting(
    key: str, request_data: SettingUpdateInput, console: PrivilegedConsole
) -> SettingOutput:
    result = await console.update_platform_setting.execute(key, request_data.value)
    return SettingOutput(**result)


@router.patch(
    "/products/{product_id}", response_model=ProductOutput, summary="Toggle product visibility"
)
async def update_product(
    product_id: str, request_data: ProductUpdateInput, console: PrivilegedConsole
) -> ProductOutput:
    result = await console.set_product_active.execute(product_id, request_data.is_active)
    return ProductOutput(**result)


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete product",
)
async def delete_product(product_id: str, console: PrivilegedConsole) -> None:
    await console.delete_product.execute(product_id)


@router.get("/sellers", response_model=list[SellerOutput], summary="List sellers")
async def list_sellers(console: PrivilegedConsole) -> list[SellerOutput]:
    """List identities holding a seller role, sorted by name."""
    return await console.list_sellers.execute()
