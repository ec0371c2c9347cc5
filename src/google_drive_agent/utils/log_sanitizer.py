"""
Log sanitization utilities to keep document names, search terms and
identifiers out of the logs.

Drive queries and folder names are user content and frequently carry
personal data, so values are reduced to a short preview plus their length
before they reach a log handler.
"""

import re
from typing import Optional, List

_EMAIL_PATTERN = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b')
_PHONE_PATTERN = re.compile(r'\b\d{3}[-.]?\d{3}[-.]?\d{4}\b')
_QUOTED_TERM_PATTERN = re.compile(r"(['\"])(.*?)\1")


def sanitize_query(query: str, max_length: int = 30) -> str:
    """
    Sanitize a Drive search query for logging.

    Email addresses and phone numbers are masked, and the terms inside
    quotes of a filter expression are replaced so the structure of the
    filter stays readable without its values.

    Args:
        query: Plain text or filter expression
        max_length: Maximum length to show

    Returns:
        Sanitized query representation

    Example:
        "name contains 'budget 2024'" -> "'name contains '…'' (27 chars)"
    """
    if not query:
        return "[empty-query]"

    sanitized = _EMAIL_PATTERN.sub('[EMAIL]', query)
    sanitized = _PHONE_PATTERN.sub('[PHONE]', sanitized)
    sanitized = _QUOTED_TERM_PATTERN.sub(lambda m: f"{m.group(1)}…{m.group(1)}", sanitized)

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + "..."

    return f"'{sanitized}' ({len(query)} chars)"


def sanitize_name(name: str, max_preview_length: int = 12) -> str:
    """
    Sanitize a file or folder name for logging.

    Args:
        name: Name to sanitize
        max_preview_length: Maximum characters to show from the name

    Returns:
        Sanitized name representation
    """
    if not name:
        return "[no-name]"

    preview = name[:max_preview_length]
    if len(name) > max_preview_length:
        preview += "..."

    return f"'{preview}' ({len(name)} chars)"


def sanitize_file_id(file_id: Optional[str]) -> str:
    """
    Shorten a Drive file or folder id for logging.

    Example:
        "1AbCdEfGhIjKlMnOpQrStUv" -> "[id: 1AbCdEfG...StUv]"
    """
    if not file_id:
        return "[no-id]"

    if len(file_id) <= 12:
        return f"[id: {file_id}]"
    return f"[id: {file_id[:8]}...{file_id[-4:]}]"


def sanitize_id_list(file_ids: Optional[List[str]]) -> str:
    """Sanitize a list of ids, e.g. a file's parents."""
    if not file_ids:
        return "[]"
    return "[" + ", ".join(sanitize_file_id(file_id) for file_id in file_ids) + "]"


def sanitize_for_logging(**kwargs) -> dict:
    """
    Sanitize multiple fields for logging in one call.

    Args:
        **kwargs: Fields to sanitize (query, name, file_id, folder_id, ...)

    Returns:
        Dictionary with sanitized values
    """
    sanitized = {}

    for key, value in kwargs.items():
        if key == 'query':
            sanitized[key] = sanitize_query(value)
        elif key == 'name':
            sanitized[key] = sanitize_name(value)
        elif key in ('file_id', 'folder_id', 'parent_id'):
            sanitized[key] = sanitize_file_id(value) if value else None
        elif key == 'parents' and isinstance(value, list):
            sanitized[key] = sanitize_id_list(value)
        else:
            # Limits, flags and counts are not user content
            sanitized[key] = value

    return sanitized
