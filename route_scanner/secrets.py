"""
Hardcoded Secret Detection
==========================
Line-based keyword rule set for spotting credentials in source text.

The rule set ships empty, so detection is a no-op and the secrets report is
always written as an empty list. Keywords are only matched when a caller
passes them in explicitly (``secret_keywords`` in the scanner config).
"""

import re
import logging
from typing import List, Optional, Sequence

logger = logging.getLogger("route_scanner.secrets")

DEFAULT_SECRET_KEYWORDS: Sequence[str] = ()


class SecretDetector:
    """
    Report source lines containing any configured keyword as a whole word.

    Usage:
        detector = SecretDetector()              # disabled, always []
        detector = SecretDetector(["password"])  # opt-in rule set
        lines = detector.detect(content)
    """

    def __init__(self, keywords: Optional[Sequence[str]] = None):
        self.keywords = list(keywords if keywords is not None else DEFAULT_SECRET_KEYWORDS)
        self._pattern = None
        if self.keywords:
            alternatives = "|".join(re.escape(k) for k in self.keywords)
            self._pattern = re.compile(rf"\b({alternatives})\b", re.IGNORECASE)
            logger.info(f"Secret detection enabled with {len(self.keywords)} keywords")

    @property
    def enabled(self) -> bool:
        return self._pattern is not None

    def detect(self, content: str) -> List[str]:
        if self._pattern is None:
            return []

        secrets = {}
        for line in content.split("\n"):
            if self._pattern.search(line):
                secrets[line.strip()] = None
        return list(secrets)
