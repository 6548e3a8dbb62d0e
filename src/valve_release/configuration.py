import os
from dataclasses import dataclass, field
from typing import Optional

from langchain_core.runnables import RunnableConfig


@dataclass(kw_only=True)
class SearchConfiguration:
    """Runtime configuration injected via thread config (RunnableConfig['configurable'])."""

    time_budget: int = field(
        default_factory=lambda: int(os.getenv("VALVE_TIME_BUDGET", "25"))
    )
    agent_count: int = field(
        default_factory=lambda: int(os.getenv("VALVE_AGENT_COUNT", "2"))
    )
    start_valve: str = field(
        default_factory=lambda: os.getenv("VALVE_START", "AA")
    )
    use_upper_bound: bool = True
    max_search_depth: int = 200

    def __post_init__(self) -> None:
        if self.time_budget < 0:
            raise ValueError(f"time_budget must be non-negative, got {self.time_budget}")
        if self.agent_count < 1:
            raise ValueError(f"agent_count must be at least 1, got {self.agent_count}")

    @classmethod
    def from_runnable_config(
        cls, config: Optional[RunnableConfig] = None
    ) -> "SearchConfiguration":
        configurable = (config or {}).get("configurable", {})
        return cls(
            **{k: v for k, v in configurable.items() if k in cls.__dataclass_fields__}
        )
