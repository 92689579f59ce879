"""LLM déterministe pour le développement local sans fournisseur externe.

Renvoie toujours un objet JSON `{"insightText": ...}` conforme, choisi de façon stable à
partir du contenu du prompt.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Literal, overload

from inyon.infra.llm.base import LLM

REFLECTIONS = (
    "The day may unfold at a gentle pace, leaving room for quiet attention. "
    "Small, familiar routines can often feel a little more grounding than usual.",
    "Conversations may carry a warmer undertone today. "
    "Moments of honest curiosity can tend to open space for easy connection.",
    "Attention often settles on what feels steady and close at hand. "
    "Simple tasks may bring a calm sense of completion as the hours pass.",
)


class FakeDeterministicLLM(LLM):
    """LLM factice: même prompt, même reflet."""

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
        last = messages[-1]["content"] if messages else ""
        digest = hashlib.sha256(last.encode("utf-8")).digest()
        text = json.dumps({"insightText": REFLECTIONS[digest[0] % len(REFLECTIONS)]})
        return (text, {}) if with_usage else text
