"""Unit tests for provider selection."""

import pytest

from qa.util.di import (
    PersistenceProvider,
    ProdConfigProvider,
    ProviderBase,
    get_provider,
)
from qa.util.di.infrastructure import ProdPersistenceProvider
from qa.util.error import DependencyInjectionError
from tests.di import MockPersistenceProvider, build_test_container


class TestProviderSelection:
    def test_concrete_provider_used_as_is(self):
        assert get_provider(ProdConfigProvider, use_mock=True) is ProdConfigProvider

    def test_mockable_component_selects_by_flag(self):
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider

    def test_missing_implementation(self):
        class SearchIndexProvider(ProviderBase):
            pass

        class MockSearchIndexProvider(SearchIndexProvider):
            __is_mock__ = True

        with pytest.raises(DependencyInjectionError, match="No production"):
            get_provider(SearchIndexProvider, use_mock=False)

    def test_unknown_component_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"search-index"})
