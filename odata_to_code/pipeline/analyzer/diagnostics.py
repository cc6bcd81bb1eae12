"""
Collector for non-fatal resolution problems.
"""

from __future__ import annotations

import logging

from ...errors import ODataModelError

logger = logging.getLogger(__name__)


class Diagnostics:
    """Records problems that skip a single item instead of aborting the run.

    In strict mode every recorded problem is raised instead.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.errors: list[ODataModelError] = []

    def record(self, error: ODataModelError) -> None:
        if self.strict:
            raise error
        logger.warning("%s", error)
        self.errors.append(error)

    def __len__(self) -> int:
        return len(self.errors)
