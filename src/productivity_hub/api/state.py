from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..services import ServiceContext


@dataclass
class ApiState:
    """Holds the service context behind the registered API functions, built on first use."""

    _context: Optional[ServiceContext] = field(default=None)

    @property
    def context(self) -> ServiceContext:
        if self._context is None:
            self._context = ServiceContext()
        return self._context

    def use(self, context: ServiceContext) -> None:
        if self._context is not None and self._context is not context:
            self._context.close()
        self._context = context

    def ensure_started(self) -> ServiceContext:
        context = self.context
        context.start()
        return context

    def shutdown(self) -> None:
        if self._context is not None:
            self._context.close()
            self._context = None


api_state = ApiState()
