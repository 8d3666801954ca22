"""Compiled pattern cache and a catalogue of common string patterns.

The cache is shared by the whole process and never evicts. Two callers
compiling the same source at once both produce an equivalent pattern, and
``dict.setdefault`` keeps whichever landed first, so no lock is needed.
"""

import logging
import re

logger = logging.getLogger(__name__)


class PatternCache:
    """Memoizes compiled regular expressions by their source string."""

    def __init__(self) -> None:
        self._compiled: dict[str, re.Pattern[str]] = {}

    def get(self, source: str) -> re.Pattern[str]:
        """Return the compiled pattern for *source*, compiling it on first use.

        Raises:
            re.error: If *source* is not a valid regular expression.
        """
        compiled = self._compiled.get(source)
        if compiled is None:
            logger.debug(f"Compiling pattern {source!r}")
            compiled = self._compiled.setdefault(source, re.compile(source))
        return compiled

    def __contains__(self, source: object) -> bool:
        return source in self._compiled

    def __len__(self) -> int:
        return len(self._compiled)


pattern_cache = PatternCache()


class Patterns:
    """Ready-made sources for the ``pattern`` attribute of string nodes.

    Example:
        >>> schema = {"email": {"type": "string", "pattern": Patterns.EMAIL, "lowercase": True}}
    """

    EMAIL = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
    URI = r"^[a-zA-Z][a-zA-Z0-9+.-]*:.*$"
    USERNAME = r"^[a-zA-Z0-9_.]{3,16}$"
    SLUG = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
    UUID = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
    DURATION = r"^P(?:\d+Y)?(?:\d+M)?(?:\d+D)?(?:T(?:\d+H)?(?:\d+M)?(?:\d+S)?)?$"
    HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}){1,2}$"
