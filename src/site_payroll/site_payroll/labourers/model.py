from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Labourer:
    """Labourer as seen by payroll. Managed by the external labour CRUD system."""

    labourer_id: int
    full_name: str
    rate: Optional[Decimal]
    site_id: Optional[int] = None
    status: str = "active"
