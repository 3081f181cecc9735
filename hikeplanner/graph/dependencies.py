"""
External collaborators used by the route planner graph.

Bundles the oracle client, the maps provider and the clock so tests and
callers can swap any of them.
"""

from dataclasses import dataclass
from typing import Optional

from openai import OpenAI

from hikeplanner.shared.clock import Clock, system_clock
from hikeplanner.shared.maps.client import GoogleMapsClient


@dataclass
class PlannerDependencies:
    """
    Collaborators for one or more planning calls.

    Attributes:
        llm_client: OpenAI client; the cached default client when None
        maps: Places/directions provider; built from the environment when None
        clock: Wall clock for ETAs, route ids and time-of-day tips
    """

    llm_client: Optional[OpenAI] = None
    maps: Optional[GoogleMapsClient] = None
    clock: Clock = system_clock

    def get_maps(self) -> GoogleMapsClient:
        if self.maps is None:
            self.maps = GoogleMapsClient()
        return self.maps
