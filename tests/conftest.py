# tests/conftest.py
import asyncio
import copy
import logging
from collections import Counter
from typing import Any, Dict, Optional

import pytest
import structlog

from interlinear.core.domain.exceptions import ResourceUnavailableError, TranslationFailedError
from interlinear.core.domain.models import TranslationRequest, TranslationResponse
from interlinear.services.dictionary_store import DictionaryStore
from interlinear.services.lexicon_store import LexiconStore
from interlinear.services.tagged_book_store import TaggedBookStore
from interlinear.services.translation_memo import TranslationMemoizer
from interlinear.core.use_cases.resolve_definition import DefinitionResolver
from interlinear.core.use_cases.interlinear_service import InterlinearService
from interlinear.shared.container import Container

LEXICON_PATH = "bible/strongs-lexicon.json"
DICTIONARY_PATH = "bible/strongs-dictionary-pt.json"
BOOK_TEMPLATE = "bible/kjv/{code}.json"

# --- Sample Documents ---

LEXICON_DOC: Dict[str, Any] = {
    "H1": {
        "Hb_word": "אָב",
        "transliteration": "ʼâb",
        "strongs_def": "father, in a literal and immediate, or figurative and remote application",
        "part_of_speech": "Noun Masculine",
        "root_word": "a primitive word",
        "occurrences": "1215",
        "outline_usage": "father of an individual; of God as father of his people",
    },
    "H430": {
        "Hb_word": "אֱלֹהִים",
        "transliteration": "ʼĕlôhîym",
        "strongs_def": "gods in the ordinary sense; but specifically used (in the plural thus, especially with the article) of the supreme God",
        "part_of_speech": "Noun Masculine",
        "outline_usage": "rulers, judges; divine ones; God",
    },
    "G2316": {
        "Gk_word": "θεός",
        "transliteration": "theós",
        "strongs_def": "a deity, especially the supreme Divinity",
        "part_of_speech": "Noun Masculine",
        "outline_usage": "a god or goddess; the Godhead",
    },
    "G0026": {
        "Gk_word": "ἀγάπη",
        "transliteration": "agápē",
        "strongs_def": "love, i.e. affection or benevolence; specially (plural) a love-feast",
        "part_of_speech": "Noun Feminine",
        "outline_usage": "brotherly love, affection, good will, love, benevolence",
    },
    "G25": {
        "Gk_word": "ἀγαπάω",
        "transliteration": "agapáō",
        "strongs_def": "to love (in a social or moral sense)",
        "part_of_speech": "Verb",
        "outline_usage": "of persons; to welcome, to entertain, to be fond of null",
    },
    "G1325": {
        "Gk_word": "δίδωμι",
        "transliteration": "dídōmi",
        "strongs_def": "to give",
        "part_of_speech": "Verb",
        "outline_usage": "to give something to someone",
    },
}

DICTIONARY_DOC: Dict[str, Any] = {
    "metadata": {"entry_count": 3, "language": "pt-BR"},
    "entries": [
        {
            "identifier": "1",
            "language_tag": "hebrew",
            "term": "pai",
            "transliteration": "ab",
            "part_of_speech": "substantivo masculino",
            "definitions": ["pai de um indivíduo", "antepassado", "fundador", "de Deus como pai do seu povo"],
        },
        {
            "identifier": "2316",
            "language_tag": "greek",
            "term": "Deus",
            "transliteration": "theos",
            "part_of_speech": "substantivo masculino",
            "definitions": ["um deus ou deusa", "a Divindade"],
        },
        {
            "identifier": "430",
            "language_tag": "hebrew",
            "term": "Deus",
            "transliteration": "",
            "part_of_speech": "",
            "definitions": [],
        },
    ],
}

JHN_DOC: Dict[str, Any] = {
    "Jhn": {
        "Jhn|3": {
            "Jhn|3|16": {
                "en": "For[G1063] God[G2316] so[G3779] loved[G25] the world,[G2889] that he gave[G1325] his[G846] only begotten[G3439] Son,[G5207]"
            },
            "Jhn|3|17": {
                "en": "For[G1063] God[G2316] sent[G649] not[G3756] his[G846] Son[G5207] into[G1519] the world[G2889]"
            },
            "Jhn|3|19": {
                "en": "And[G1161] this[G3778] is[G2076] the condemnation[G2920]"
            },
        }
    }
}

GEN_DOC: Dict[str, Any] = {
    "Gen": {
        "Gen|1": {
            "Gen|1|1": {"en": "In the beginning[H7225] God[H430] created[H1254] [H853] the heaven[H8064]"},
        }
    }
}


def default_documents() -> Dict[str, Any]:
    return {
        LEXICON_PATH: copy.deepcopy(LEXICON_DOC),
        DICTIONARY_PATH: copy.deepcopy(DICTIONARY_DOC),
        BOOK_TEMPLATE.format(code="Jhn"): copy.deepcopy(JHN_DOC),
        BOOK_TEMPLATE.format(code="Gen"): copy.deepcopy(GEN_DOC),
    }


# --- Fakes ---

class FakeResourceFetcher:
    """
    In-memory IResourceFetcher.
    Each fetch yields to the event loop once so concurrent callers overlap.
    """

    def __init__(self, documents: Optional[Dict[str, Any]] = None):
        self.documents = documents if documents is not None else default_documents()
        self.calls: Counter = Counter()
        self.failing: set = set()
        self.closed = False

    async def fetch_json(self, path: str) -> Any:
        self.calls[path] += 1
        await asyncio.sleep(0)
        if path in self.failing:
            raise ResourceUnavailableError(path, "HTTP 503")
        if path not in self.documents:
            raise ResourceUnavailableError(path, "HTTP 404")
        return self.documents[path]

    async def close(self) -> None:
        self.closed = True


class FakeTranslator:
    """
    ITranslator that 'translates' by prefixing 'pt:'.
    `release` lets a test hold every call in flight until it is set.
    """

    def __init__(self):
        self.calls: Counter = Counter()
        self.fail = False
        self.release: Optional[asyncio.Event] = None
        self.response: Optional[TranslationResponse] = None

    async def translate(self, strongs_id: str, request: TranslationRequest) -> TranslationResponse:
        self.calls[strongs_id] += 1
        if self.release is not None:
            await self.release.wait()
        else:
            await asyncio.sleep(0)
        if self.fail:
            raise TranslationFailedError(strongs_id, "gateway error")
        if self.response is not None:
            return self.response
        return TranslationResponse(
            word=f"pt:{request.word}" if request.word else None,
            definition=f"pt:{request.definition}" if request.definition else None,
            usage=f"pt:{request.usage}" if request.usage else None,
        )

    async def close(self) -> None:
        return None


# --- Fixtures ---

@pytest.fixture(scope="session", autouse=True)
def route_logs_through_stdlib():
    """Keeps structlog output off stdout so CLI tests can parse what they print."""
    structlog.configure(
        processors=[structlog.processors.add_log_level, structlog.processors.KeyValueRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture(scope="function")
def fetcher():
    return FakeResourceFetcher()


@pytest.fixture(scope="function")
def translator():
    return FakeTranslator()


@pytest.fixture(scope="function")
def lexicon_store(fetcher):
    return LexiconStore(fetcher, LEXICON_PATH)


@pytest.fixture(scope="function")
def dictionary_store(fetcher):
    return DictionaryStore(fetcher, DICTIONARY_PATH)


@pytest.fixture(scope="function")
def tagged_book_store(fetcher):
    return TaggedBookStore(fetcher, BOOK_TEMPLATE)


@pytest.fixture(scope="function")
def memo(translator):
    return TranslationMemoizer(translator, timeout=1.0)


@pytest.fixture(scope="function")
def resolver(dictionary_store, lexicon_store):
    return DefinitionResolver(dictionary_store, lexicon_store)


@pytest.fixture(scope="function")
def service(resolver, tagged_book_store, memo):
    return InterlinearService(resolver, tagged_book_store, memo)


@pytest.fixture(scope="function")
def container(fetcher, translator):
    """
    Sets up the Dependency Injection Container for testing.
    It overrides the gateways with the in-memory fakes defined above.
    """
    container = Container()
    container.resource_fetcher.override(fetcher)
    container.translator.override(translator)

    yield container

    container.unwire()
    container.reset_override()
