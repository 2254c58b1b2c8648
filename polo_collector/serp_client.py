# serp_client.py – SerpAPI Google search wrapper for the POLO collector
#
# Usage:
#   from polo_collector.serp_client import collect_serp
#   rows = collect_serp(cfg, api_key=settings.serpapi_api_key)
#
# Configuration: requires SERPAPI_API_KEY (see polo_collector.config.settings)

from __future__ import annotations

import logging
import random
import time
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional, Iterator, Tuple

import requests
from tqdm import tqdm

from polo_collector.config import CollectionConfig

SERP_ENDPOINT = "https://serpapi.com/search.json"
RESULTS_PER_PAGE = 10

SERP_COLUMNS = [
    "query", "country", "language", "tbs", "page", "position",
    "title", "link", "displayed_link", "snippet", "source_type", "retrieved_at",
]

logger = logging.getLogger(__name__)


class SerpApiError(RuntimeError):
    """Raised when a SerpAPI call fails or returns an error payload."""


class MissingApiKeyError(SerpApiError):
    """Raised when no SerpAPI key is configured."""


def serpapi_get(params: Dict[str, Any], timeout: float = 20, session=None) -> Dict[str, Any]:
    """GET the SerpAPI endpoint and return the decoded JSON body.

    ``session`` may be a :class:`requests.Session` (or anything with a
    compatible ``get``); defaults to the ``requests`` module.
    """
    http = session if session is not None else requests
    try:
        r = http.get(SERP_ENDPOINT, params=params, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except (requests.RequestException, ValueError) as e:
        raise SerpApiError(f"SerpAPI request failed (engine={params.get('engine')}): {e}") from e

    if not isinstance(data, dict):
        raise SerpApiError(f"SerpAPI returned unexpected JSON (engine={params.get('engine')}): {type(data).__name__}")
    if data.get("error"):
        raise SerpApiError(f"SerpAPI error: {data['error']}")
    return data


def serp_search(
    query: str,
    *,
    country: str,
    language: str,
    tbs: Optional[str],
    page: int,
    api_key: str,
    num: int = RESULTS_PER_PAGE,
    timeout: float = 20,
    session=None,
) -> Dict[str, Any]:
    """
    Call SerpAPI (engine=google) for one results page and return raw JSON.
    ``page`` is 0-based; ``tbs`` is only sent when set.
    """
    params = {
        "api_key": api_key,
        "engine": "google",
        "q": query,
        "gl": country.lower(),
        "lr": language,
        "num": num,
        "start": page * num,
        "output": "json",
    }
    if tbs is not None:
        params["tbs"] = tbs
    return serpapi_get(params, timeout=timeout, session=session)


def parse_serp_results(raw: Dict[str, Any], max_items: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Normalize a SerpAPI response into a flat list of result dicts:
    [{position, title, link, displayed_link, snippet, source_type}, ...]
    Pulls from: organic_results, answer_box, top_stories (where available).
    """
    results: List[Dict[str, Any]] = []

    # Organic search
    for item in raw.get("organic_results", []) or []:
        results.append({
            "position": item.get("position"),
            "title": item.get("title") or "",
            "link": item.get("link") or "",
            "displayed_link": item.get("displayed_link") or "",
            "snippet": item.get("snippet") or "",
            "source_type": "organic",
        })

    # Answer box (featured snippet)
    ab = raw.get("answer_box")
    if ab:
        results.append({
            "position": None,
            "title": ab.get("title") or ab.get("result", "Answer Box"),
            "link": ab.get("link", ""),
            "displayed_link": ab.get("displayed_link", ""),
            "snippet": ab.get("snippet") or ab.get("result", ""),
            "source_type": "answer_box",
        })

    # News / Top Stories
    for story in raw.get("top_stories", []) or []:
        results.append({
            "position": None,
            "title": story.get("title") or "",
            "link": story.get("link") or "",
            "displayed_link": "",
            "snippet": story.get("source") or "",
            "source_type": "top_story",
        })

    # Deduplicate by link, preserve order
    seen = set()
    deduped = []
    for r_ in results:
        link = r_["link"]
        if not link or link in seen:
            continue
        seen.add(link)
        deduped.append(r_)
        if max_items is not None and len(deduped) >= max_items:
            break

    return deduped


def _combinations(cfg: CollectionConfig) -> Iterator[Tuple[str, str, str]]:
    for query in cfg.queries:
        for country in cfg.destinations:
            for language in cfg.languages:
                yield query, country, language


def pause_between(pause: Tuple[float, float]) -> None:
    """Sleep a random interval within ``pause`` (min, max) seconds."""
    lo, hi = pause
    if hi > 0:
        time.sleep(random.uniform(lo, hi))


def collect_serp(
    cfg: CollectionConfig,
    *,
    api_key: str,
    timeout: float = 20,
    session=None,
    progress: bool = True,
) -> List[Dict[str, Any]]:
    """
    Run every query x country x language x page combination and return flat rows
    (see ``SERP_COLUMNS``). Failed pages are logged and skipped; a combination
    stops paging once a page comes back without organic results.
    """
    if not api_key:
        raise MissingApiKeyError("SERPAPI_API_KEY is not set")

    combos = list(_combinations(cfg))
    rows: List[Dict[str, Any]] = []
    first_request = True

    for query, country, language in tqdm(combos, desc="🔎 SERP", disable=not progress):
        for page in range(cfg.pages):
            if not first_request:
                pause_between(cfg.pause)
            first_request = False

            try:
                raw = serp_search(
                    query,
                    country=country,
                    language=language,
                    tbs=cfg.tbs,
                    page=page,
                    api_key=api_key,
                    timeout=timeout,
                    session=session,
                )
            except SerpApiError as e:
                logger.warning(f"SERP failed for query='{query}' gl={country} lr={language} page={page}: {e}")
                continue

            retrieved_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
            parsed = parse_serp_results(raw)
            for item in parsed:
                rows.append({
                    "query": query,
                    "country": country,
                    "language": language,
                    "tbs": cfg.tbs,
                    "page": page + 1,
                    **item,
                    "retrieved_at": retrieved_at,
                })

            if not raw.get("organic_results"):
                logger.info(f"No more organic results for '{query}' gl={country} lr={language} after page {page + 1}")
                break

    logger.info(f"✅ SERP collection finished: {len(rows)} rows from {len(combos)} combinations")
    return rows
