"""Application configuration via environment variables and YAML.

Service settings are prefixed with EXEMPLAR_ and can be overridden via
environment variables (e.g. EXEMPLAR_MODEL_ID=gpt-4o). The OpenAI credential
is also picked up from the conventional OPENAI_API_KEY / OPENAI_KEY variables.

Generation policy (token budgets, guardrail word band, criteria defaults) is
loaded from a YAML file with environment override support.
Priority: environment variables > YAML file > code defaults.
"""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings

load_dotenv()

ENV_PREFIX = "EXEMPLAR_POLICY_"

PLACEHOLDER_API_KEYS = {"your_api_key_here", "changeme"}


class GenerationConfig(BaseModel):
    max_tokens_es: int = 800
    max_tokens_ms: int = 900
    max_tokens_lp: int = 1400
    temperature: float = 0.3

    @property
    def max_tokens_by_studio(self) -> dict[str, int]:
        return {"ES": self.max_tokens_es, "MS": self.max_tokens_ms, "LP": self.max_tokens_lp}


class GuardrailsConfig(BaseModel):
    es_max_words: int = 200
    lp_min_words: int = 350


class DefaultsConfig(BaseModel):
    """Slice bounds used when the model omits criteriaCovered/criteriaMissing."""

    covered_start: int = 0
    covered_end: int = 3
    missing_start: int = 3
    missing_end: int = 5


class FallbackConfig(BaseModel):
    prompt_preview_chars: int = 80


class PolicyConfig(BaseModel):
    generation: GenerationConfig = GenerationConfig()
    guardrails: GuardrailsConfig = GuardrailsConfig()
    defaults: DefaultsConfig = DefaultsConfig()
    fallback: FallbackConfig = FallbackConfig()


def _apply_env_overrides(data: dict) -> dict:
    """Override YAML values with EXEMPLAR_POLICY_<SECTION>_<KEY> env vars.

    Sections missing from the YAML are seeded from the code defaults so that
    every known key can be overridden even without a policy file.
    """
    defaults = PolicyConfig().model_dump()
    for section_name, section_defaults in defaults.items():
        section = data.setdefault(section_name, {})
        if not isinstance(section, dict):
            continue
        for key, default in section_defaults.items():
            env_val = os.environ.get(f"{ENV_PREFIX}{section_name.upper()}_{key.upper()}")
            if env_val is None:
                continue
            existing = section.get(key, default)
            # Coerce to the same type as the existing value
            if isinstance(existing, int):
                section[key] = int(env_val)
            elif isinstance(existing, float):
                section[key] = float(env_val)
            else:
                section[key] = env_val
    return data


def load_policy_config(config_path: str = "config/policy.yaml") -> PolicyConfig:
    """Load policy config from YAML, apply env overrides, fall back to defaults."""
    path = Path(config_path)
    data: dict = {}

    if path.exists():
        raw = path.read_text(encoding="utf-8")
        data = yaml.safe_load(raw) or {}

    data = _apply_env_overrides(data)
    return PolicyConfig.model_validate(data)


class Settings(BaseSettings):
    """Exemplar Service configuration. Fields map to EXEMPLAR_<FIELD_NAME> env vars."""

    model_config = {"env_prefix": "EXEMPLAR_"}

    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("EXEMPLAR_OPENAI_API_KEY", "OPENAI_API_KEY", "OPENAI_KEY"),
    )
    openai_base_url: str | None = None
    model_id: str = "gpt-4"
    model_timeout: float = 60.0
    policy_config_path: str = "config/policy.yaml"
    cors_origins: str = "http://localhost:3000"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3001

    @property
    def has_credentials(self) -> bool:
        key = self.openai_api_key.strip()
        return bool(key) and key.lower() not in PLACEHOLDER_API_KEYS

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
policy_config = load_policy_config(settings.policy_config_path)

if __name__ == "__main__":
    print(settings)
    print(policy_config.model_dump())
