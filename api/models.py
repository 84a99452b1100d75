from typing import List, Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    """API representation of a scraped listing."""

    id: Optional[str] = None
    name: str
    price: str
    link: str
    image: str
    description: str


class ScrapeResponse(BaseModel):
    """Response for a successful scrape."""

    success: bool = True
    keyword: str
    pages_scraped: int = Field(alias="pagesScraped")
    total_products: int = Field(alias="totalProducts")
    products: List[Product]

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error: str
    message: str
