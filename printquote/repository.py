"""
Quote fixture repository.

Seed products, the default form and stored quotes live behind this
interface instead of module constants, so the engine and the API can run
against any fixture set.

Lookup chain for the JSON-backed repository:
1. The file at settings.SEED_DATA_PATH (printquote/data/seed_data.json by default)
2. Built-in catalog lists from models.py for finishing options and product names
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

from .config import settings
from .models import FINISHING_OPTIONS, PRODUCT_NAMES
from .schemas import OtherQuantityRow, QuoteDetail, QuoteFormData, QuoteSummary

logger = logging.getLogger(__name__)


class QuoteRepository(ABC):
    """Read-only source of fixture data for the quoting wizard."""

    @abstractmethod
    def get_detail(self, quote_id: str) -> Optional[QuoteDetail]:
        """Stored snapshot for a quote id, or None if there is none."""

    @abstractmethod
    def list_quotes(self) -> list:
        """QuoteSummary rows for every stored quote."""

    @abstractmethod
    def default_form(self) -> QuoteFormData:
        """A fresh form a new quote session starts from."""

    def other_quantities(self) -> list:
        return []

    def finishing_options(self) -> list:
        return list(FINISHING_OPTIONS)

    def product_names(self) -> list:
        return list(PRODUCT_NAMES)


class InMemoryQuoteRepository(QuoteRepository):
    """
    Repository over a plain dict shaped like data/seed_data.json.
    Every read returns newly validated models, so sessions never share state.
    """

    def __init__(self, data: dict = None):
        self._data = data or {}

    def get_detail(self, quote_id: str) -> Optional[QuoteDetail]:
        raw = self._data.get("quote_details", {}).get(quote_id)
        if raw is None:
            return None
        return QuoteDetail.model_validate(raw)

    def list_quotes(self) -> list:
        return [QuoteSummary.model_validate(q) for q in self._data.get("quotes", [])]

    def default_form(self) -> QuoteFormData:
        return QuoteFormData.model_validate(self._data.get("default_form", {}))

    def other_quantities(self) -> list:
        return [OtherQuantityRow.model_validate(r) for r in self._data.get("other_quantities", [])]

    def finishing_options(self) -> list:
        return list(self._data.get("finishing_options", FINISHING_OPTIONS))

    def product_names(self) -> list:
        return list(self._data.get("product_names", PRODUCT_NAMES))


def load_repository(path: str = None) -> InMemoryQuoteRepository:
    """
    Load fixture data from a JSON file. A missing or malformed file gives an
    empty repository (blank default form, no stored quotes).
    """
    path = path or settings.SEED_DATA_PATH
    try:
        with open(path) as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Seed data unavailable at %s: %s", path, e)
        return InMemoryQuoteRepository({})

    logger.info(
        "Loaded %d stored quotes from %s",
        len(data.get("quote_details", {})), path,
    )
    return InMemoryQuoteRepository(data)


_repository: Optional[QuoteRepository] = None


def get_repository() -> QuoteRepository:
    """FastAPI dependency — the process-wide fixture repository, loaded once."""
    global _repository
    if _repository is None:
        _repository = load_repository()
    return _repository
