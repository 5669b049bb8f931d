from __future__ import annotations  # Configuration schema for LLM routing

from pathlib import Path
from typing import Dict, Tuple

from pydantic import BaseModel, Field


class LlmRoute(BaseModel):  # LLM endpoint configuration
    name: str
    base_url: str
    endpoint: str
    model: str
    timeout_s: float = Field(ge=0.1)
    max_retries: int = Field(default=0, ge=0)
    api_key_env: str | None = None
    response_format: str | None = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)
    sequential: bool = False
    enforce_json: bool = True
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)


class PromptSettings(BaseModel):  # Prompt shaping for the interviewer agent
    history_limit: int = Field(default=0, ge=0)  # 0 sends every prior turn
    notes_max_chars: int = Field(default=400, ge=1)


class AppConfig(BaseModel):  # Application configuration root
    llm_routes: Dict[str, LlmRoute]
    registry: Dict[str, str]
    prompts: PromptSettings = Field(default_factory=PromptSettings)


def load_config(path: Path) -> AppConfig:  # Load configuration from disk
    data = Path(path).read_text(encoding="utf-8")
    return AppConfig.model_validate_json(data)


def resolve_registry(cfg: AppConfig, targets: Tuple[str, ...]) -> Dict[str, LlmRoute]:  # Map registry targets to routes
    resolved: Dict[str, LlmRoute] = {}
    for target in targets:
        if target not in cfg.registry:
            raise KeyError(f"Registry entry missing for '{target}'")
        route_id = cfg.registry[target]
        if route_id not in cfg.llm_routes:
            raise KeyError(f"Route '{route_id}' missing for '{target}'")
        resolved[target] = cfg.llm_routes[route_id]
    return resolved


def load_app_registry(path: Path, targets: Tuple[str, ...]) -> Tuple[AppConfig, Dict[str, LlmRoute]]:  # Load config and build registry
    cfg = load_config(path)
    return cfg, resolve_registry(cfg, targets)
