"""
Conversions between token streams and JSON / CSV data.
"""

import csv
import io
import json
import logging
from typing import Any, Dict, List, Optional

from xstream.config import BucketMode, config
from xstream.types import GLOBAL, AdapterError, TokenBucket, XStreamError, validate

logger = logging.getLogger(__name__)


def _scalar(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)) or value is None:
        return json.dumps(value)
    return None


def _token(namespace: Optional[str], key: str, value: str) -> str:
    if ";" in value or '"' in value:
        raise AdapterError(f"Value for '{key}' cannot be written as a token: {value!r}")
    if namespace:
        return f'{namespace}:{key}="{value}"'
    return f'{key}="{value}"'


def _json_to_tokens(obj: Dict[str, Any], namespace: Optional[str], tokens: List[str]) -> None:
    for key, value in obj.items():
        if isinstance(value, dict):
            child = f"{namespace}.{key}" if namespace else key
            _json_to_tokens(value, child, tokens)
        elif isinstance(value, list):
            for index, item in enumerate(value):
                text = _scalar(item)
                if text is None:
                    logger.debug(f"Skipping nested item {key}[{index}]")
                    continue
                tokens.append(_token(namespace, f"{key}[{index}]", text))
        else:
            tokens.append(_token(namespace, key, _scalar(value)))


def from_json(text: str) -> str:
    """
    Convert a JSON object into a token stream.

    Nested objects become dotted namespaces, arrays of scalars become
    indexed keys (tags[0], tags[1], ...).

    Raises:
        AdapterError: If the JSON is invalid, not an object, empty, or holds
            values that cannot be written as tokens
    """
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise AdapterError(f"JSON parse error: {e}") from e

    if not isinstance(value, dict):
        raise AdapterError("JSON must be an object at root level")

    tokens: List[str] = []
    _json_to_tokens(value, None, tokens)
    if not tokens:
        raise AdapterError("Empty JSON object")

    stream = config.token_separator.join(tokens)
    try:
        validate(stream)
    except XStreamError as e:
        raise AdapterError(f"JSON keys cannot be written as tokens: {e}") from e
    return stream


def from_csv(text: str) -> str:
    """
    Convert CSV text (header row plus data rows) into a token stream.

    Data row i becomes namespace row<i>. Rows whose column count does not
    match the header are skipped, as are empty cells.

    Raises:
        AdapterError: If there is no data, or a header or cell cannot be
            written as a token
    """
    rows = list(csv.reader(io.StringIO(text.strip())))
    if len(rows) < 2:
        raise AdapterError("CSV must have header and at least one data row")

    headers = [header.strip() for header in rows[0]]
    for header in headers:
        if "=" in header:
            raise AdapterError(f"CSV header {header!r} cannot be used as a token key")
    tokens = []

    for index, row in enumerate(rows[1:]):
        if len(row) != len(headers):
            logger.warning(f"Skipping CSV row {index}: expected {len(headers)} columns, got {len(row)}")
            continue
        for header, cell in zip(headers, row):
            cell = cell.strip()
            if header and cell:
                tokens.append(_token(f"row{index}", header, cell))

    if not tokens:
        raise AdapterError("No valid CSV data found")

    stream = config.token_separator.join(tokens)
    try:
        validate(stream)
    except XStreamError as e:
        raise AdapterError(f"CSV data cannot be written as a token stream: {e}") from e
    return stream


def _nest(root: Dict[str, Any], namespace: str) -> Dict[str, Any]:
    node = root
    for part in namespace.split("."):
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            raise AdapterError(f"Namespace '{namespace}' collides with key '{part}'")
        node = child
    return node


def bucket_to_dict(bucket: TokenBucket) -> Dict[str, Any]:
    """Global keys at the root, other namespaces nested along their path."""
    result: Dict[str, Any] = dict(bucket.data.get(GLOBAL, {}))
    for namespace, values in bucket.data.items():
        if namespace == GLOBAL:
            continue
        node = _nest(result, namespace)
        for key, value in values.items():
            if isinstance(node.get(key), dict):
                raise AdapterError(f"Key '{namespace}:{key}' collides with a namespace")
            node[key] = value
    return result


def to_json(stream: str, indent: int = 2) -> str:
    """Convert a token stream into pretty-printed JSON."""
    try:
        bucket = TokenBucket.from_str(stream, BucketMode.FLAT)
    except XStreamError as e:
        raise AdapterError(f"Token parse error: {e}") from e
    return json.dumps(bucket_to_dict(bucket), indent=indent)
