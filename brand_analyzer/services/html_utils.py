from dataclasses import dataclass
from bs4 import BeautifulSoup
from typing import Optional
from brand_analyzer.services.normalizer import clean_text, truncate

NOT_FOUND = "Not found"
MAX_PARAGRAPH_CHARS = 255


@dataclass
class PageSummary:
    brand_name: str
    description: str


def soupify(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")

def _meta_content(soup: BeautifulSoup, **attrs) -> Optional[str]:
    meta = soup.find("meta", attrs=attrs)
    if meta and meta.get("content"):
        return meta["content"].strip() or None
    return None

def extract_brand_name(soup: BeautifulSoup) -> Optional[str]:
    if soup.title and soup.title.get_text(strip=True):
        return clean_text(soup.title.get_text())
    return _meta_content(soup, property="og:site_name")

def extract_description(soup: BeautifulSoup) -> Optional[str]:
    content = _meta_content(soup, name="description")
    if content:
        return content
    p = soup.find("p")
    if p:
        text = clean_text(p.get_text(" "))
        if text:
            return truncate(text, MAX_PARAGRAPH_CHARS)
    return None

def extract_page_summary(html: Optional[str]) -> PageSummary:
    """Brand name and description with the "Not found" sentinel as the last fallback."""
    soup = soupify(html or "")
    return PageSummary(
        brand_name=extract_brand_name(soup) or NOT_FOUND,
        description=extract_description(soup) or NOT_FOUND,
    )
