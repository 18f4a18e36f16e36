"""Main entry point for the portfolio refresher.

This script fetches the GitHub profile and repositories, keeps them fresh
with the refresh scheduler and logs the resulting portfolio view.
"""
import asyncio
import os
import sys
import logging
from dataclasses import dataclass
from dotenv import load_dotenv
from portfolio.infrastructure.github_client import GitHubRestClient, GITHUB_API_BASE_URL
from portfolio.application.portfolio_service import PortfolioService, PortfolioView
from portfolio.application.refresh_scheduler import RefreshScheduler, REFRESH_INTERVAL_SECONDS
from portfolio.application.visibility import PageVisibility

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    username: str
    api_url: str
    refresh_interval: float
    request_timeout: float
    refresh_cycles: int


def load_settings() -> Settings:
    """Build settings from environment variables.

    Raises:
        ValueError: When a numeric variable cannot be parsed or is out of range
    """
    settings = Settings(
        username=os.getenv("GITHUB_USERNAME", "adam-olser"),
        api_url=os.getenv("GITHUB_API_URL", GITHUB_API_BASE_URL),
        refresh_interval=float(os.getenv("REFRESH_INTERVAL_SECONDS", str(REFRESH_INTERVAL_SECONDS))),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30")),
        refresh_cycles=int(os.getenv("REFRESH_CYCLES", "1"))
    )
    if settings.refresh_interval <= 0 or settings.request_timeout <= 0:
        raise ValueError("REFRESH_INTERVAL_SECONDS and REQUEST_TIMEOUT_SECONDS must be positive")
    if settings.refresh_cycles < 0:
        raise ValueError("REFRESH_CYCLES must not be negative")
    return settings


def log_view(view: PortfolioView) -> None:
    """Log a summary of the rendered portfolio."""
    logger.info("=" * 50)
    if view.profile:
        logger.info(f"Profile: {view.profile.login} ({view.profile.public_repos} public repos, "
                    f"{view.profile.followers} followers)")
    logger.info(f"Featured projects: {', '.join(card.title for card in view.featured) or '-'}")
    logger.info(f"Other projects: {', '.join(card.title for card in view.other) or '-'}")
    for category in view.skill_categories:
        evidenced = [skill.name for skill in category.skills if skill.evidenced]
        logger.info(f"  {category.category}: {', '.join(evidenced) or '-'}")
    logger.info("=" * 50)


async def main():
    """Run the refresh scheduler for the configured number of cycles."""
    try:
        settings = load_settings()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info(f"Starting portfolio refresher for {settings.username}")

    github_client = GitHubRestClient(
        settings.username,
        base_url=settings.api_url,
        timeout_seconds=settings.request_timeout
    )
    service = PortfolioService(github_client, settings.username)
    scheduler = RefreshScheduler(
        service,
        interval_seconds=settings.refresh_interval,
        visibility=PageVisibility()
    )

    try:
        async with scheduler:
            if settings.refresh_cycles:
                await scheduler.wait_for_cycles(settings.refresh_cycles)
            else:
                # Run until interrupted
                await asyncio.Event().wait()
        view = service.view()
        log_view(view)
        if view.loading:
            logger.error("No portfolio data could be loaded")
            sys.exit(1)
    finally:
        await service.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted")
