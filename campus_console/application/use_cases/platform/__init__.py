"""Platform administration use cases."""

from campus_console.application.use_cases.platform.list_sellers import ListSellersUseCase
from campus_console.application.use_cases.platform.moderate_products import (
    DeleteProductUseCase,
    SetProductActiveUseCase,
)
from campus_console.application.use_cases.platform.update_platform_setting import (
    UpdatePlatformSettingUseCase,
)

__all__ = [
    "DeleteProductUseCase",
    "ListSellersUseCase",
    "SetProductActiveUseCase",
    "UpdatePlatformSettingUseCase",
]
