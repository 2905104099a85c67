from lifesync.coordinator.coordinator_agent import (
    CoordinatorAgent,
    RoutingDecision,
    match_persona,
)

__all__ = ["CoordinatorAgent", "RoutingDecision", "match_persona"]
