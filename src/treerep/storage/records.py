# Author: PB
# Maintainer: PB
# Original date: 2026.10.15
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/treerep/storage/records.py

from datetime import datetime, UTC
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class ReplicationRecord(BaseModel):
    """What one successful replication produced, as written by ``copy --record``."""
    source: Path
    destination: Path
    completed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    tree_hash: Optional[str] = None
