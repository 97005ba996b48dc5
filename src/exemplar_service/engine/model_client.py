"""
Async completion client wrapper using the OpenAI SDK.

Two variants share the same ``generate`` coroutine:

- ModelClient: configured with an API key; one chat completion per call with
  the studio's token budget and a low temperature for structural consistency.
  SDK retries are disabled, so a request makes exactly one attempt.
- UnconfiguredModelClient: no credential available; every call fails fast with
  CompletionFailure so the pipeline serves the fallback result.
"""

from openai import APITimeoutError, AsyncOpenAI

from ..config import GenerationConfig, PolicyConfig, Settings
from ..errors import CompletionFailure
from ..logging import logger


class ModelClient:
    configured = True

    def __init__(
        self,
        api_key: str,
        model_id: str,
        base_url: str | None = None,
        timeout: float = 60.0,
        generation: GenerationConfig | None = None,
    ):
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )
        self.model_id = model_id
        self.timeout = timeout
        self.generation = generation or GenerationConfig()

    def max_tokens_for(self, studio: str) -> int:
        budgets = self.generation.max_tokens_by_studio
        return budgets.get(studio, budgets["ES"])

    async def generate(self, system_prompt: str, user_prompt: str, studio: str) -> str:
        max_tokens = self.max_tokens_for(studio)
        logger.info(f"Calling {self.model_id} for {studio} with max_tokens={max_tokens}")
        try:
            response = await self.client.chat.completions.create(
                model=self.model_id,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.generation.temperature,
                max_tokens=max_tokens,
            )
        except APITimeoutError as e:
            logger.error(f"Model call timed out after {self.timeout}s")
            raise CompletionFailure(f"Model call timed out after {self.timeout}s") from e
        except Exception as e:
            logger.error(f"Model call failed: {e}")
            raise CompletionFailure(f"Model call failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise CompletionFailure("No response content from model")

        if response.usage:
            logger.debug(
                f"Model usage: prompt_tokens={response.usage.prompt_tokens} "
                f"completion_tokens={response.usage.completion_tokens}"
            )
        return content


class UnconfiguredModelClient:
    configured = False
    model_id = None

    async def generate(self, system_prompt: str, user_prompt: str, studio: str) -> str:
        raise CompletionFailure("Model API key not configured")


def create_model_client(
    settings: Settings, policy: PolicyConfig
) -> ModelClient | UnconfiguredModelClient:
    if not settings.has_credentials:
        logger.warning("No OpenAI API key configured; every request will use fallback examples")
        return UnconfiguredModelClient()
    return ModelClient(
        api_key=settings.openai_api_key,
        model_id=settings.model_id,
        base_url=settings.openai_base_url,
        timeout=settings.model_timeout,
        generation=policy.generation,
    )
