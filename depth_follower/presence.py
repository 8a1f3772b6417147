#!/usr/bin/env python3
"""
presence.py - Target visibility from blob detector reports
"""

import logging
from typing import Optional


class TargetPresenceTracker:
    """
    Holds whether the target is currently visible.

    Each report fully overwrites the previous one; there is no smoothing.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)
        self._visible = False

    def update(self, blob_count: int) -> bool:
        """
        Record a blob detector report.

        Args:
            blob_count: Number of blobs in the latest report

        Returns:
            The new visibility flag
        """
        visible = blob_count > 0
        if visible != self._visible:
            self._logger.info(
                f"[TARGET] {'visible' if visible else 'lost'} (blobs={blob_count})"
            )
        self._visible = visible
        return visible

    @property
    def visible(self) -> bool:
        return self._visible
