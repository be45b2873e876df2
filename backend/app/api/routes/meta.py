"""Health, API information and configuration summary endpoints."""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request, status

from app.api.schemas.meta import (
    ApiInfo,
    ApiInfoResponse,
    ConfigResponse,
    ConfigSummary,
    HealthResponse,
    OpenAIConfig,
    RateLimitConfig,
    SupabaseConfig,
)
from app.core.config import settings
from app.observability.tracing import trace

router = APIRouter(prefix="/api")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse, tags=["health"], summary="Readiness check")
def health_check(request: Request) -> HealthResponse:
    """Return a simple status payload so automation can check the API is up."""
    with trace("http.health_check", metadata={"route": "/api/health"}, request_id=request.state.request_id):
        return HealthResponse(
            message=f"{settings.app_name} is running",
            version=settings.app_version,
            environment=settings.environment,
            timestamp=_now(),
        )


@router.get("", response_model=ApiInfoResponse, tags=["meta"])
def api_info() -> ApiInfoResponse:
    return ApiInfoResponse(
        data=ApiInfo(
            message=f"{settings.app_name} API",
            version=settings.app_version,
            endpoints={"health": "/api/health", "planning": "/api/openai/plan"},
            timestamp=_now(),
        )
    )


@router.get("/config", response_model=ConfigResponse, tags=["meta"])
def config_summary() -> ConfigResponse:
    """Describe the loaded configuration without exposing secrets. Disabled in production."""
    if settings.is_production:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Configuration endpoint not available in production",
        )

    api_key = settings.openai_api_key
    return ConfigResponse(
        config=ConfigSummary(
            environment=settings.environment,
            cors_origin=settings.cors_origin,
            rate_limit=RateLimitConfig(
                window_ms=settings.rate_limit_window_ms,
                max_requests=settings.rate_limit_max_requests,
                provider=settings.rate_limit_provider,
            ),
            openai=OpenAIConfig(
                api_key_configured=bool(api_key),
                api_key_prefix=f"{api_key[:7]}..." if api_key else None,
                model=settings.openai_model,
            ),
            supabase=SupabaseConfig(
                url_configured=bool(settings.supabase_url),
                anon_key_configured=bool(settings.supabase_anon_key),
            ),
        )
    )
