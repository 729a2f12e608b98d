"""
Normalization of provider output into the GeneratedIdea contract
"""
import json
import re
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

from idea_studio.errors import MissingFieldError, ResponseParseError, truncate
from idea_studio.logging_config import logger
from idea_studio.schemas import GeneratedIdea, MarketInfo, Product, RoadmapStep


NOT_AVAILABLE = "N/A"
PRODUCT_SEARCH_URL = "https://www.google.com/search?q={query}"

_FENCE_RE = re.compile(r"^```[A-Za-z0-9_-]*\s*|\s*```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block, if any"""
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_RE.sub("", text).strip()
    return text


def _first_object(value: Any, raw_text: str) -> Dict[str, Any]:
    if isinstance(value, list):
        if not value:
            raise ResponseParseError("Provider returned an empty list", raw_text=raw_text)
        value = value[0]
    if not isinstance(value, dict):
        raise ResponseParseError(
            f"Expected a JSON object, got {type(value).__name__}", raw_text=raw_text
        )
    return value


def parse_response_text(text: str) -> Dict[str, Any]:
    """
    Parse provider text into a JSON object

    Args:
        text: Raw completion text, possibly fenced or list-wrapped

    Returns:
        The decoded top-level object

    Raises:
        ResponseParseError: If the text is not JSON or holds no object
    """
    cleaned = strip_code_fences(text or "")
    try:
        value = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in provider response: {str(e)}")
        raise ResponseParseError(
            f"Invalid JSON response: {truncate(cleaned, 200)}", raw_text=cleaned
        ) from e
    return _first_object(value, cleaned)


def _text(value: Any, default: str = NOT_AVAILABLE) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value, default="")
    return text or None


def _market(data: Dict[str, Any]) -> MarketInfo:
    market = data.get("marketData") or data.get("market") or {}
    if not isinstance(market, dict):
        market = {}
    growth = market.get("growthRate", market.get("growth"))
    return MarketInfo(
        size=_text(market.get("size")),
        growth=_text(growth),
        competition=_text(market.get("competition")),
        direction=_optional_text(market.get("direction")),
        value=_optional_text(market.get("value")),
    )


def _why_you(value: Any) -> List[str]:
    """Collapse the why-you breakdown into an ordered list of reasons"""
    if isinstance(value, dict):
        strengths = value.get("mbtiStrengths") or []
        if not isinstance(strengths, list):
            strengths = [strengths]
        items = [*strengths, value.get("locationAdvantage"), value.get("experienceMatch")]
    elif isinstance(value, list):
        items = value
    elif value:
        items = [value]
    else:
        items = []
    return [text for text in (_text(item, default="") for item in items) if text]


def _roadmap(value: Any) -> List[RoadmapStep]:
    if not isinstance(value, list):
        return []

    steps = []
    for index, item in enumerate(value, start=1):
        if isinstance(item, str):
            if item.strip():
                steps.append(RoadmapStep(week=str(index), task=item.strip()))
            continue
        if not isinstance(item, dict):
            continue

        week = _text(item.get("week"), default=str(index))
        if "tasks" not in item and "title" not in item:
            task = _text(item.get("task"))
        else:
            tasks = item.get("tasks")
            if isinstance(tasks, list):
                tasks = ", ".join(t for t in (_text(t, default="") for t in tasks) if t)
            tasks = _text(tasks, default="")
            title = _text(item.get("title"), default="")
            if title and tasks:
                task = f"{title}: {tasks}"
            else:
                task = title or tasks or NOT_AVAILABLE
        steps.append(RoadmapStep(week=week, task=task))
    return steps


def product_search_link(query: str) -> str:
    return PRODUCT_SEARCH_URL.format(query=quote(query, safe=""))


def _products(value: Any) -> List[Product]:
    if not isinstance(value, list):
        return []

    products = []
    for item in value:
        if not isinstance(item, dict):
            continue
        name = _text(item.get("name"))
        link = _text(item.get("link"), default="")
        if not link:
            keyword = _text(item.get("amazonKeyword") or item.get("keyword"), default="")
            link = product_search_link(keyword or name)
        products.append(Product(name=name, price=_text(item.get("price")), link=link))
    return products


def normalize_idea(data: Union[Dict[str, Any], List[Any]]) -> GeneratedIdea:
    """
    Map a decoded provider payload onto the GeneratedIdea contract

    Args:
        data: Decoded JSON, either an object or a list whose first element is one

    Returns:
        GeneratedIdea with every optional field defaulted

    Raises:
        MissingFieldError: If the title is missing or empty
    """
    raw_text = json.dumps(data, ensure_ascii=False, default=str)
    data = _first_object(data, raw_text)

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        logger.error(f"Provider response missing title: {truncate(raw_text, 200)}")
        raise MissingFieldError("title", raw_text=raw_text)

    return GeneratedIdea(
        title=title.strip(),
        description=_text(data.get("description")),
        market=_market(data),
        why_you=_why_you(data.get("whyYou")),
        roadmap=_roadmap(data.get("roadmap")),
        products=_products(data.get("products")),
    )


def normalize_response(text: str) -> GeneratedIdea:
    """Parse and normalize raw provider text in one step"""
    return normalize_idea(parse_response_text(text))
