"""
Parsing of the BGG XML API 2 collection document into GameRecord models.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict

from pydantic import ValidationError

from ..error_handling import MalformedResponse
from ..models import CollectionFetchResult, GameRecord

logger = logging.getLogger(__name__)


def element_to_dict(element: ET.Element) -> Dict[str, Any]:
    """
    Fold an element's attributes and children into one mapping.

    Text-only children become strings (empty ones None), children carrying
    attributes or sub-elements become nested mappings, and repeated children
    become lists.
    So `<average value="7.1"/>` maps to `{"value": "7.1"}` while
    `<name sortindex="1">Catan</name>` maps to `"Catan"`.
    """
    data: Dict[str, Any] = dict(element.attrib)
    for child in element:
        text = (child.text or "").strip()
        if len(child) == 0 and (text or not child.attrib):
            value: Any = text or None
        else:
            value = element_to_dict(child)

        if child.tag in data:
            existing = data[child.tag]
            if isinstance(existing, list):
                existing.append(value)
            else:
                data[child.tag] = [existing, value]
        else:
            data[child.tag] = value
    return data


def parse_collection(content: bytes, username: str) -> CollectionFetchResult:
    """
    Parse a collection response body.

    Args:
        content: Raw body of a 200 response
        username: Username the collection was requested for

    Returns:
        Parsed collection with items in document order

    Raises:
        MalformedResponse: if the body is not a readable collection document
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise MalformedResponse(username, f"Invalid XML in collection for '{username}': {e}") from e

    if root.tag == "errors":
        messages = [m.text.strip() for m in root.iter("message") if m.text]
        raise MalformedResponse(username, f"BGG reported an error for '{username}': {'; '.join(messages) or 'unknown error'}")
    if root.tag != "items":
        raise MalformedResponse(username, f"Unexpected root element <{root.tag}> in collection for '{username}'")

    try:
        items = tuple(GameRecord.model_validate(element_to_dict(item)) for item in root.findall("item"))
    except ValidationError as e:
        raise MalformedResponse(username, f"Invalid item in collection for '{username}': {e.error_count()} error(s)") from e

    logger.debug(f"Parsed {len(items)} items for '{username}'")
    return CollectionFetchResult(username=username, items=items)
