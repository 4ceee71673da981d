from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Labourer


class LabourerRepository(Protocol):
    def list_labourers(self, *, site_id: Optional[int] = None) -> Sequence[Labourer]:
        raise NotImplementedError
