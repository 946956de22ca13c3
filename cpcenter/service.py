"""Service entry points for CP materials and the wiring that builds them."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from dataclasses import dataclass
from os import PathLike
from typing import Any

from cpcenter import idgen
from cpcenter.handler import CPMaterialHandler
from cpcenter.messages import (
    CreateCPMaterialRequest,
    CreateCPMaterialResponse,
    GetCPMaterialRequest,
    GetCPMaterialResponse,
    ReviewCPMaterialRequest,
    ReviewCPMaterialResponse,
    UpdateCPMaterialRequest,
    UpdateCPMaterialResponse,
)
from cpcenter.repository import (
    SqliteCPMaterialRepository,
    SqliteCPRepository,
    create_schema,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "CpCenterService"


class UnknownMethodError(LookupError):
    """The service has no method with the requested name."""

    def __init__(self, method: str) -> None:
        super().__init__(f"unknown method {method!r} for {SERVICE_NAME}")
        self.method = method


@dataclass
class CpCenterService:
    """The CP center service: every call is passed on to a CPMaterialHandler."""

    handler: CPMaterialHandler

    def create_cp_material(self, req: CreateCPMaterialRequest) -> CreateCPMaterialResponse:
        """Create a new CP material."""
        return self.handler.create_cp_material(req)

    def update_cp_material(self, req: UpdateCPMaterialRequest) -> UpdateCPMaterialResponse:
        """Update an existing CP material."""
        return self.handler.update_cp_material(req)

    def review_cp_material(self, req: ReviewCPMaterialRequest) -> ReviewCPMaterialResponse:
        """Record a review decision on a CP material."""
        return self.handler.review_cp_material(req)

    def get_cp_material(self, req: GetCPMaterialRequest) -> GetCPMaterialResponse:
        """Fetch a CP material."""
        return self.handler.get_cp_material(req)

    def _methods(self) -> dict[str, tuple[type, Callable[[Any], Any]]]:
        return {
            "CreateCPMaterial": (CreateCPMaterialRequest, self.create_cp_material),
            "UpdateCPMaterial": (UpdateCPMaterialRequest, self.update_cp_material),
            "ReviewCPMaterial": (ReviewCPMaterialRequest, self.review_cp_material),
            "GetCPMaterial": (GetCPMaterialRequest, self.get_cp_material),
        }

    def method_names(self) -> list[str]:
        """Return the names of the methods the service offers."""
        return list(self._methods())

    def dispatch(self, method: str, req: Any) -> Any:
        """Call the method with the given name on a request of its type."""
        try:
            request_type, call = self._methods()[method]
        except KeyError:
            raise UnknownMethodError(method) from None
        if not isinstance(req, request_type):
            raise TypeError("invalid message type for service method handler")
        return call(req)


def init_client(database: str | PathLike[str] | sqlite3.Connection) -> CPMaterialHandler:
    """Set up the id generator and the database, and return a ready handler.

    ``database`` is either an open SQLite connection or a path to open.
    """
    idgen.set_id_generator(idgen.ID_WORKERS)
    try:
        if isinstance(database, sqlite3.Connection):
            conn = database
        else:
            conn = sqlite3.connect(database)
        create_schema(conn)
    except sqlite3.Error as err:
        raise RuntimeError(f"failed to initialize database: {err}") from err
    logger.info("Database connection initialized successfully.")
    return CPMaterialHandler(
        material_repo=SqliteCPMaterialRepository(conn),
        cp_repo=SqliteCPRepository(conn),
    )