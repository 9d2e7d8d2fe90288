# interlinear/shared/container.py
from dependency_injector import containers, providers

from interlinear.shared.config import settings
from interlinear.adapters.http_fetcher import HttpResourceFetcher
from interlinear.adapters.filesystem_fetcher import FileSystemResourceFetcher
from interlinear.adapters.http_translator import HttpTranslator
from interlinear.adapters.gemini_translator import GeminiTranslator
from interlinear.services.lexicon_store import LexiconStore
from interlinear.services.dictionary_store import DictionaryStore
from interlinear.services.tagged_book_store import TaggedBookStore
from interlinear.services.translation_memo import TranslationMemoizer
from interlinear.core.use_cases.resolve_definition import DefinitionResolver
from interlinear.core.use_cases.interlinear_service import InterlinearService
from interlinear.core.use_cases.translate_pending import TranslatePending


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    Owns every cache: the stores and the translation memo are Singletons, so
    one container means one set of caches. Tests build their own container
    and override the gateways.
    """

    # 1. Configuration
    config = providers.Configuration(pydantic_settings=[settings])

    # 2. Gateways (Infrastructure Adapters)

    # Static documents: web server or local copy of the web root
    resource_fetcher = providers.Selector(
        config.RESOURCE_BACKEND,
        http=providers.Singleton(
            HttpResourceFetcher,
            base_url=config.RESOURCE_BASE_URL,
            timeout=config.RESOURCE_TIMEOUT_SEC,
        ),
        filesystem=providers.Singleton(
            FileSystemResourceFetcher,
            root=config.RESOURCE_DIR,
        ),
    )

    translator = providers.Selector(
        config.TRANSLATION_BACKEND,
        http=providers.Singleton(
            HttpTranslator,
            url=config.TRANSLATION_URL,
            api_key=config.TRANSLATION_API_KEY,
            timeout=config.TRANSLATION_TIMEOUT_SEC,
        ),
        gemini=providers.Singleton(
            GeminiTranslator,
            api_key=config.GOOGLE_API_KEY,
            model_name=config.AI_MODEL_NAME,
        ),
    )

    # 3. Caches (Singleton: one per container)

    lexicon_store = providers.Singleton(
        LexiconStore,
        fetcher=resource_fetcher,
        path=config.LEXICON_PATH,
    )

    dictionary_store = providers.Singleton(
        DictionaryStore,
        fetcher=resource_fetcher,
        path=config.DICTIONARY_PATH,
        pad_width=config.STRONGS_PAD_WIDTH,
        definition_fragments=config.DICTIONARY_DEFINITION_FRAGMENTS,
    )

    tagged_book_store = providers.Singleton(
        TaggedBookStore,
        fetcher=resource_fetcher,
        path_template=config.TAGGED_BOOK_PATH_TEMPLATE,
        language=config.TAGGED_TEXT_LANGUAGE,
    )

    translation_memo = providers.Singleton(
        TranslationMemoizer,
        translator=translator,
        timeout=config.TRANSLATION_TIMEOUT_SEC,
        pad_width=config.STRONGS_PAD_WIDTH,
    )

    # 4. Use Cases (Application Logic)

    definition_resolver = providers.Singleton(
        DefinitionResolver,
        dictionary=dictionary_store,
        lexicon=lexicon_store,
        pad_width=config.STRONGS_PAD_WIDTH,
    )

    interlinear_service = providers.Singleton(
        InterlinearService,
        resolver=definition_resolver,
        books=tagged_book_store,
        memo=translation_memo,
    )

    # Factory: stateless, the caches it works on are the Singletons above
    translate_pending = providers.Factory(
        TranslatePending,
        lexicon=lexicon_store,
        memo=translation_memo,
        pad_width=config.STRONGS_PAD_WIDTH,
    )


async def close_resources(container: Container) -> None:
    """Closes pooled connections held by the gateways."""
    await container.resource_fetcher().close()
    await container.translator().close()


# Instantiate the container for global access (e.g. by FastAPI)
container = Container()
