"""Route table - maps each local endpoint to its upstream call."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """One local endpoint and how it reaches upstream.

    `params` pairs each required local query parameter with the name it
    goes out under. All of them must be present and non-empty.
    """

    path: str
    upstream_path: str
    params: tuple[tuple[str, str], ...]
    missing_reply: str

    def missing(self, query: dict[str, str]) -> bool:
        """True if any required parameter is absent or empty."""
        return any(not query.get(name) for name, _ in self.params)

    def upstream_params(self, query: dict[str, str]) -> dict[str, str]:
        """Rename the local parameters to their upstream names."""
        return {upstream: query[name] for name, upstream in self.params}


# Route registry - maps exact local paths to routes
_routes: dict[str, Route] = {}


def register_route(route: Route) -> None:
    """Register a route by its local path."""
    _routes[route.path] = route
    logger.info(f"Registered route: {route.path} -> {route.upstream_path}")


def get_route(path: str) -> Route | None:
    """Look up a route by exact path. No trailing-slash forgiveness."""
    return _routes.get(path)


def init_routes() -> None:
    """Register the built-in routes. Safe to call more than once."""
    register_route(Route(
        path="/gemini",
        upstream_path="/ai/gemini",
        params=(("prompt", "text"),),
        missing_reply="Prompt is required",
    ))
    register_route(Route(
        path="/geminiAdvance",
        upstream_path="/ai/gemini-advance",
        params=(("prompt", "text"),),
        missing_reply="Prompt is required",
    ))
    register_route(Route(
        path="/readImage",
        upstream_path="/ai/gemini-img",
        params=(("prompt", "text"), ("imgURL", "url")),
        missing_reply="Prompt and imgURL are required",
    ))
    register_route(Route(
        path="/video",
        upstream_path="/ai/gemini-video",
        params=(("prompt", "text"), ("videoURL", "url")),
        missing_reply="Prompt and videoURL are required",
    ))
    logger.info(f"Router initialized with {len(_routes)} routes")
