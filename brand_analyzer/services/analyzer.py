import logging
import re
from starlette.concurrency import run_in_threadpool
from brand_analyzer.db.repo import WebsiteRepository
from brand_analyzer.exceptions import AnalyzerError, InternalError, ValidationError
from brand_analyzer.models.schemas import WebsiteRecord
from brand_analyzer.services.enhancer import GeminiEnhancer
from brand_analyzer.services.fetcher import Fetcher
from brand_analyzer.services.html_utils import extract_page_summary

logger = logging.getLogger(__name__)

URL_RE = re.compile(r'(ftp|http|https)://[^\s"]+')


def validate_url(url) -> str:
    if not url:
        raise ValidationError("URL is required.")
    if not isinstance(url, str) or not URL_RE.fullmatch(url):
        raise ValidationError("Invalid URL format.", detail=f"rejected url {url!r}")
    return url


class WebsiteAnalyzer:
    """Fetch a page, extract brand name and description, enhance, persist."""

    def __init__(self, fetcher: Fetcher, enhancer: GeminiEnhancer, repository: WebsiteRepository):
        self.fetcher = fetcher
        self.enhancer = enhancer
        self.repository = repository

    async def analyze(self, url) -> WebsiteRecord:
        url = validate_url(url)
        try:
            html = await self.fetcher.fetch_html(url)
            summary = extract_page_summary(html)
            result = await self.enhancer.enhance(summary.description)
            if not result.enhanced:
                logger.info("Keeping scraped description for %s (%s)", url, result.reason)
            record = await run_in_threadpool(
                self.repository.create, summary.brand_name, result.text
            )
        except AnalyzerError as e:
            logger.error("Error analyzing website %s: %s", url, e)
            raise
        except Exception as e:
            logger.exception("Error analyzing website %s", url)
            raise InternalError(
                "Failed to analyze website due to an internal server error.", detail=str(e)
            ) from e
        logger.info("Stored analysis of %s as record %d", url, record.id)
        return record
