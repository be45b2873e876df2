"""Schemas for health and service metadata endpoints."""
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    version: str
    environment: str
    timestamp: str


class ApiInfo(BaseModel):
    message: str
    version: str
    endpoints: Dict[str, str]
    timestamp: str


class ApiInfoResponse(BaseModel):
    success: bool = True
    message: str = "API information"
    data: ApiInfo


class RateLimitConfig(BaseModel):
    window_ms: int
    max_requests: int
    provider: str


class OpenAIConfig(BaseModel):
    api_key_configured: bool
    api_key_prefix: str | None
    model: str


class SupabaseConfig(BaseModel):
    url_configured: bool
    anon_key_configured: bool


class ConfigSummary(BaseModel):
    environment: str
    cors_origin: str
    rate_limit: RateLimitConfig
    openai: OpenAIConfig
    supabase: SupabaseConfig


class ConfigResponse(BaseModel):
    success: bool = True
    message: str = "Configuration loaded successfully"
    config: ConfigSummary
