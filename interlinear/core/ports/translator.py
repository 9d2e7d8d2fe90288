# interlinear/core/ports/translator.py
from typing import Protocol

from interlinear.core.domain.models import TranslationRequest, TranslationResponse


class ITranslator(Protocol):
    """
    Port for the external machine-translation call.
    Adapters (HttpTranslator, GeminiTranslator) must implement this.
    """

    async def translate(self, strongs_id: str, request: TranslationRequest) -> TranslationResponse:
        """
        Translates the word/definition/usage of one lexicon entry.

        Returns:
            A response where any absent field means 'keep the source text'.

        Raises:
            TranslationFailedError, CircuitBreakerOpenError or transport errors.
        """
        ...

    async def close(self) -> None:
        ...
