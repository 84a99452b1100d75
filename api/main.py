import logging

from fastapi import Depends, FastAPI, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import settings
from core.scrapers.websites.ebay_scraper import EbayScraper

from .models import ErrorResponse, Product, ScrapeResponse

logging.basicConfig(
    level=settings.LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("scraper-api")

FAILURE_MESSAGE = "Scraping failed. Please try again later."

app = FastAPI(
    title="eBay Scraper API",
    description="REST API for scraping eBay search listings",
    version=settings.PROJECT_VERSION,
)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_scraper() -> EbayScraper:
    """Build a fresh scraper per request so runs never share a transport."""
    return EbayScraper(settings.pipeline_config())


@app.get("/", tags=["General"])
async def root():
    """Root endpoint providing API information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.PROJECT_VERSION,
        "message": "eBay Scraper API is running!",
        "endpoints": {
            "scrape": "GET /api/scrape?keyword=product_name&pages=number",
        },
    }


@app.get(
    "/api/scrape",
    response_model=ScrapeResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Scraping"],
)
def scrape_products(
    keyword: str = Query("nike", min_length=1, description="Search term"),
    pages: int = Query(1, description="Number of result pages to scrape"),
    scraper: EbayScraper = Depends(get_scraper),
):
    """Scrape eBay listings for a keyword.

    Declared as a plain function so FastAPI runs it in its threadpool; the
    pipeline sleeps between requests and must not block the event loop.
    """
    logger.info("Starting scrape for: '%s' (%s pages)", keyword, pages)
    try:
        result = scraper.run(keyword, pages)
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Scraping error: %s", str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=str(e), message=FAILURE_MESSAGE).model_dump(),
        )

    return ScrapeResponse(
        keyword=result.keyword,
        pages_scraped=result.pages_scraped,
        total_products=result.total_products,
        products=[Product(**record.to_dict()) for record in result.records],
    )


@app.exception_handler(Exception)
async def general_exception_handler(_request, exc):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=str(exc), message=FAILURE_MESSAGE).model_dump(),
    )


# Run with: uvicorn api.main:app --reload
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="0.0.0.0", port=8000, reload=True)
