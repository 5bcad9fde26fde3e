# fintrack/client/state.py
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")

@dataclass
class ResourceState(Generic[T]):
    """Cached list plus the loading flag and last error for one resource."""
    items: List[T] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None

    def begin(self) -> None:
        self.loading = True
        self.error = None
