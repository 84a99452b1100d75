import click
import json
import logging
import traceback
from tabulate import tabulate

from config.settings import settings
from core.scrapers.base import ScraperConfigError
from core.scrapers.scraper_factory import TransportFactory
from core.scrapers.websites.ebay_scraper import EbayScraper

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("scraper-cli")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx, verbose):
    """eBay listing scraper."""
    # Store verbose flag in the Click context instead of a global variable
    ctx.ensure_object(dict)
    ctx.obj["VERBOSE"] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled")


@cli.command()
@click.option(
    "--keyword",
    "-k",
    default=settings.DEFAULT_KEYWORD,
    show_default=True,
    help="Search keyword",
)
@click.option(
    "--pages",
    "-p",
    type=int,
    default=1,
    show_default=True,
    help=f"Number of result pages to scrape (capped at {settings.MAX_PAGES})",
)
@click.option(
    "--budget",
    "-b",
    type=int,
    help=f"Maximum detail pages to visit for descriptions (default: {settings.DETAIL_BUDGET})",
)
@click.option(
    "--transport",
    "-t",
    type=click.Choice(TransportFactory.available()),
    help=f"Page transport (default: {settings.TRANSPORT})",
)
@click.option(
    "--dedupe/--no-dedupe",
    default=None,
    help="Drop listings already seen on earlier pages",
)
@click.option(
    "--format-type",
    "-f",
    type=click.Choice(["text", "table", "csv", "json"]),
    default="table",
    help="Output format (default: table)",
)
@click.option("--output", "-o", type=click.Path(), help="Save results to file")
@click.pass_context
def scrape(ctx, keyword, pages, budget, transport, dedupe, format_type, output):
    """Scrape eBay search results for a keyword."""
    config = settings.pipeline_config(
        keyword=keyword,
        detail_budget=budget,
        transport=transport,
        dedupe_across_pages=dedupe,
    )
    scraper = EbayScraper(config)

    click.echo(f"Scraping '{keyword}' ({pages} pages)...")
    try:
        result = scraper.run(keyword, pages)
    except ScraperConfigError as e:
        click.echo(f"Configuration error: {str(e)}")
        ctx.exit(2)
    except ImportError as e:
        # The browser transport needs playwright installed
        click.echo(f"Import error: {str(e)}")
        click.echo(
            "This may be due to missing dependencies. Try installing required packages."
        )
        ctx.exit(1)
    except Exception as e:  # pylint: disable=broad-exception-caught
        click.echo(f"Scraping failed: {str(e)}")
        if ctx.obj["VERBOSE"]:
            click.echo(traceback.format_exc())
        ctx.exit(1)

    click.echo(
        f"Found {result.total_products} products on {result.pages_scraped} of {result.pages_requested} pages."
    )

    result_output = format_products(result.records, format_type)

    # Output to file or console
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(result_output)
        click.echo(f"Results written to {output}")
    else:
        click.echo("\n" + result_output)


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host, port, reload):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("api.main:app", host=host, port=port, reload=reload)


def _shorten(text, width):
    return text if len(text) <= width else text[: width - 3] + "..."


def format_products(records, format_type):
    """Format scraped records based on specified format type."""
    if format_type == "json":
        return json.dumps([record.to_dict() for record in records], indent=2)

    if not records:
        return "No products found."

    if format_type == "text":
        lines = [f"Found {len(records)} products:"]
        for i, record in enumerate(records, 1):
            lines.append(f"\n{i}. {record.name}")
            lines.append(f"   Price: {record.price}")
            lines.append(f"   URL: {record.link}")
            lines.append(f"   Description: {_shorten(record.description, 200)}")

        return "\n".join(lines)

    elif format_type == "csv":
        import csv
        from io import StringIO

        output = StringIO()
        writer = csv.writer(output)
        writer.writerow(["ID", "Product", "Price", "URL", "Image", "Description"])
        for record in records:
            writer.writerow(
                [
                    record.identifier,
                    record.name,
                    record.price,
                    record.link,
                    record.image,
                    record.description,
                ]
            )

        return output.getvalue()

    else:  # table format
        table_data = [
            [
                i,
                _shorten(record.name, 60),
                record.price,
                record.link,
                _shorten(record.description, 40),
            ]
            for i, record in enumerate(records, 1)
        ]
        headers = ["#", "Product", "Price", "URL", "Description"]

        return tabulate(table_data, headers=headers, tablefmt="grid")


if __name__ == "__main__":
    # This runs the Click application
    cli.main(obj={})
