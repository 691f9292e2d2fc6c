"""Draw discovery and document download from the state lottery website."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
import requests

from kerala_results.errors import DocumentFetchError
from kerala_results.models import DrawLink

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
}


def new_session() -> requests.Session:
    """Create a session carrying the browser headers the site expects."""

    session = requests.Session()
    session.headers.update(HEADERS)
    return session


def parse_draw_table(html: str | bytes) -> list[DrawLink]:
    """Parse the result listing page into draw links.

    Each table row contributes its first cell (draw name), second cell (draw
    date) and the ``href`` of the first linked cell. Header and spacer rows
    without a draw name are dropped.

    Args:
        html: Listing page markup.

    Returns:
        Draw links in page order.
    """

    soup = BeautifulSoup(html, "html.parser")
    draws: list[DrawLink] = []
    for row in soup.find_all("tr"):
        cells = row.find_all("td")
        if not cells:
            continue
        name = cells[0].get_text(strip=True)
        if not name:
            continue
        date = cells[1].get_text(strip=True) if len(cells) > 1 else ""
        link = row.select_one("td a[href]")
        href = link["href"] if link is not None else ""
        draws.append(DrawLink(lottery_name=name, lottery_date=date, pdf_link=str(href)))
    return draws


def _get(session: requests.Session, url: str, timeout: float) -> requests.Response:
    try:
        response = session.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise DocumentFetchError(f"Failed to fetch {url}: {exc}") from exc
    if response.status_code != 200:
        raise DocumentFetchError(f"Bad status fetching {url}: {response.status_code}")
    return response


def fetch_draw_list(session: requests.Session, url: str, timeout: float = 30) -> list[DrawLink]:
    """Download and parse the result listing page.

    Raises:
        DocumentFetchError: On network errors or a non-200 response.
    """

    response = _get(session, url, timeout)
    draws = parse_draw_table(response.content)
    logger.info("Found %d draws on listing page", len(draws), extra={"draw_count": len(draws)})
    return draws


def fetch_document(session: requests.Session, url: str, timeout: float = 30) -> bytes:
    """Download one result document.

    Raises:
        DocumentFetchError: On network errors or a non-200 response.
    """

    return _get(session, url, timeout).content
