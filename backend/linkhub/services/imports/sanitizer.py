import re

from linkhub.core.logging import get_logger

logger = get_logger('imports.sanitizer')

# \u with fewer than 4 hex digits, or \x with fewer than 2
PROBLEMATIC_ESCAPE_RE = re.compile(r'\\(u[0-9a-fA-F]{0,3}|x[0-9a-fA-F]?)(?![0-9a-fA-F])')


def sanitize_string(value: str | None) -> str | None:
    """Escape truncated ``\\u``/``\\x`` sequences so they survive JSON encoding and storage.

    ``None`` and empty strings are returned unchanged. The function never raises:
    if processing fails every backslash is doubled instead.
    """
    if not value:
        return value

    try:
        matches = list(PROBLEMATIC_ESCAPE_RE.finditer(value))
        if not matches:
            return value

        logger.info('Found problematic escape sequence in string: %s', value)
        for match in matches:
            logger.info('Problematic escape at position %s: %s', match.start(), match.group(0))

        return PROBLEMATIC_ESCAPE_RE.sub(lambda match: '\\' + match.group(0), value)
    except Exception as exc:
        logger.error('Error sanitizing string: %s', exc)
        return str(value).replace('\\', '\\\\')
