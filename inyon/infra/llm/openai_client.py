"""
Client LLM basé sur l'API OpenAI (SDK asynchrone).

Implémente l'interface LLM via `chat.completions`. Contrairement à un fallback
silencieux, toute erreur du fournisseur est remontée sous forme de `LLMProviderError`
afin que la politique de retry de l'appelant s'applique.
"""

from __future__ import annotations

from typing import Any, Literal, overload

from openai import AsyncOpenAI, OpenAIError

from inyon.infra.llm.base import LLM, LLMProviderError


class OpenAILLM(LLM):
    """
    LLM basé sur OpenAI.

    La clé API est injectée à la construction; sans clé, aucun client n'est créé et
    chaque appel échoue avec `LLMProviderError`.
    """

    def __init__(self, api_key: str | None = None, model: str = "gpt-4o-mini") -> None:
        """Initialize the OpenAILLM client."""
        self.model = model
        # Les retries sont gérés par GenerationClient, pas par le SDK
        self.client = AsyncOpenAI(api_key=api_key, max_retries=0) if api_key else None

    # ---- Overloads pour coller à l'interface de base ----
    @overload
    async def generate(
        self,
        messages: list[dict[str, str]],
        *,
        with_usage: Literal[True],
        **kwargs: Any,
    ) -> tuple[str, dict[str, int]]: ...

    @overload
    async def generate(
        self,
        messages: list[dict[str, str]],
        *,
        with_usage: Literal[False] = False,
        **kwargs: Any,
    ) -> str: ...

    async def generate(
        self,
        messages: list[dict[str, str]],
        *,
        with_usage: bool = False,
        **kwargs: Any,
    ) -> str | tuple[str, dict[str, int]]:
        """
        Génère du texte (et éventuellement les métriques d'usage).

        - with_usage=False (défaut) -> str
        - with_usage=True -> (str, dict[str, int])
        """
        if self.client is None:
            raise LLMProviderError("openai client not configured")
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                **kwargs,
            )
        except OpenAIError as err:
            raise LLMProviderError(f"openai call failed: {type(err).__name__}") from err

        choice = resp.choices[0] if resp.choices else None
        content = getattr(getattr(choice, "message", None), "content", None)
        if not content:
            raise LLMProviderError("empty completion")
        text = str(content)
        return (text, self._extract_usage_dict(resp)) if with_usage else text

    def _extract_usage_dict(self, resp: Any) -> dict[str, int]:
        """
        Extrait les infos d'usage depuis la réponse OpenAI.

        Toujours un dict.
        """
        usage = getattr(resp, "usage", None)
        if not usage:
            return {}
        return {
            "prompt_tokens": int(getattr(usage, "prompt_tokens", 0) or 0),
            "completion_tokens": int(getattr(usage, "completion_tokens", 0) or 0),
            "total_tokens": int(getattr(usage, "total_tokens", 0) or 0),
        }
