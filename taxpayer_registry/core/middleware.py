from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp
import hashlib
from taxpayer_registry.core.audit import InMemoryAuditRepository
from taxpayer_registry.schemas.audit import ActionType, AuditLogEntry, AuditStatus
import logging
from typing import Callable

logger = logging.getLogger(__name__)

class AuditMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, repo: InMemoryAuditRepository):
        super().__init__(app)
        self.repo = repo

    async def dispatch(self, request: Request, call_next: Callable):
        # 1. Capture Request Details
        endpoint = request.url.path
        method = request.method

        action_type = ActionType.UNKNOWN
        if endpoint == "/taxpayers":
            if method == "POST":
                action_type = ActionType.ADD_TAXPAYER
            elif method == "GET":
                action_type = ActionType.LIST_TAXPAYERS
        elif endpoint == "/taxpayers/search":
            action_type = ActionType.SEARCH_TAXPAYER
        elif endpoint == "/health":
            action_type = ActionType.HEALTH_CHECK

        # 2. Hash Input (empty bodies too, for determinism)
        request_body_bytes = await request.body()
        input_hash = hashlib.sha256(request_body_bytes).hexdigest()

        # 3. Process Request
        response = None
        status = AuditStatus.FAILURE
        output_hash = None

        try:
            response = await call_next(request)
            if 200 <= response.status_code < 300:
                status = AuditStatus.SUCCESS

            # 4. Capture & Hash Output
            response_body_bytes = b""
            async for chunk in response.body_iterator:
                response_body_bytes += chunk
            output_hash = hashlib.sha256(response_body_bytes).hexdigest()

            # Reconstruct response, the iterator is spent
            response = Response(
                content=response_body_bytes,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type
            )
        finally:
            # 5. Log Event
            try:
                entry = AuditLogEntry(
                    endpoint=endpoint,
                    method=method,
                    action_type=action_type,
                    input_hash=input_hash,
                    output_hash=output_hash,
                    status=status
                )
                self.repo.save(entry)
            except Exception as log_error:
                logger.error(f"Audit Logging Failed: {log_error}")

        return response
