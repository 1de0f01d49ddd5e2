"""Per-request GraphQL context.

Only ``stores`` is shared between requests. The loaders and the
orchestrator bound to them are new for every request, so a cached author,
book or review list never outlives the request that loaded it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

if TYPE_CHECKING:
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.websockets import WebSocket

    from library_service.features.catalog.service import MutationOrchestrator
    from library_service.features.graphql.dataloaders import DataLoaders
    from library_service.infra.stores import StoreRegistry


@dataclass
class GraphQLContext(BaseContext):
    """What every resolver finds on ``info.context``.

    Built by ``get_graphql_context`` for HTTP requests; tests construct it
    directly with just the store-side fields.

        book = await info.context.loaders.book_by_id.load(int(self.book_id))
    """

    request: Request | WebSocket | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None

    stores: StoreRegistry = field(default=None)  # type: ignore[assignment]
    loaders: DataLoaders = field(default=None)  # type: ignore[assignment]
    orchestrator: MutationOrchestrator = field(default=None)  # type: ignore[assignment]
    correlation_id: str | None = None


__all__ = ["GraphQLContext"]
