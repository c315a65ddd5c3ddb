"""FastAPI route auto-discovery.

Conventions:
- Route modules live under ``community_events/routes/``.
- Each module exports ``router: APIRouter`` with its own ``prefix``/``tags``.
- Files starting with ``_`` are ignored.
- A router without tags is tagged with its module name.
"""

import importlib
import logging
from pathlib import Path

from fastapi import APIRouter, FastAPI

logger = logging.getLogger(__name__)

_ROUTES_PACKAGE = "community_events.routes"


class RouterDiscoveryError(Exception):
    """Raised when router discovery fails."""


def _iter_route_modules(routes_dir: Path, package: str) -> list[str]:
    modules = []
    for py_file in sorted(routes_dir.rglob("*.py"), key=lambda path: path.as_posix()):
        if py_file.name.startswith("_"):
            continue
        relative = py_file.relative_to(routes_dir).with_suffix("")
        modules.append(".".join((package, *relative.parts)))
    return modules


def discover_routers(
    routes_dir: Path, package: str = _ROUTES_PACKAGE
) -> list[tuple[APIRouter, list[str]]]:
    """Import every route module and collect ``(router, tags)`` pairs."""
    routers: list[tuple[APIRouter, list[str]]] = []

    for module_path in _iter_route_modules(routes_dir, package):
        try:
            module = importlib.import_module(module_path)
        except Exception as e:
            msg = (
                f"Failed to import route module '{module_path}'.\n"
                f"  Hint: Ensure the package is importable and dependencies are installed"
            )
            raise RouterDiscoveryError(msg) from e

        router = getattr(module, "router", None)
        if not isinstance(router, APIRouter):
            msg = (
                f"Route module '{module_path}' must export 'router' as an APIRouter "
                f"(got {type(router).__name__})"
            )
            raise RouterDiscoveryError(msg)

        tags = [] if router.tags else [module_path.rsplit(".", 1)[-1]]
        routers.append((router, tags))

    return routers


def register_routers(app: FastAPI, routes_dir: Path | None = None) -> None:
    """Discover and register routers with a FastAPI app.

    Fails fast on startup if a route module can't be imported or doesn't export a
    valid ``router``.
    """
    if routes_dir is None:
        routes_dir = Path(__file__).parent.parent / "routes"

    if not routes_dir.is_dir():
        raise FileNotFoundError(f"Routes directory not found: {routes_dir}")

    routers = discover_routers(routes_dir)
    if not routers:
        logger.warning("No routers discovered in %s", routes_dir)
        return

    for router, tags in routers:
        app.include_router(router, tags=tags or None)
        logger.info("Registered router %s (tags: %s)", router.prefix or "/", list(router.tags) + tags)
