"""Shared test fixtures for pytest."""

from unittest.mock import AsyncMock, Mock

import pytest

from catalog.models import CatalogResult
from search.session import SearchSession
from tests.factories import PLACEHOLDER, make_detail, make_summary


@pytest.fixture
def mock_catalog():
    """Create a mock catalog service that finds nothing."""
    catalog = AsyncMock()
    catalog.search_by_keyword = AsyncMock()
    catalog.fetch_detail = AsyncMock()
    catalog.check_api = AsyncMock(return_value=True)
    return catalog


@pytest.fixture
def mock_presenter():
    """Presenter double recording every outbound effect."""
    presenter = Mock()
    presenter.render_mode = Mock()
    presenter.set_overlay = Mock()
    presenter.set_background_animation = Mock()
    return presenter


@pytest.fixture
def sample_summaries():
    return [
        make_summary("tt0133093", "The Matrix"),
        make_summary("tt0234215", "The Matrix Reloaded", year="2003"),
        make_summary("tt0242653", "The Matrix Revolutions", year="2003"),
    ]


@pytest.fixture
def sample_details():
    return [
        make_detail("tt0133093", "The Matrix", rating=8.7, genre="Action, Sci-Fi"),
        make_detail("tt0234215", "The Matrix Reloaded", year="2003", rating=7.2),
        make_detail("tt0242653", "The Matrix Revolutions", year="2003", rating=6.7),
    ]


@pytest.fixture
def matrix_catalog(mock_catalog, sample_summaries, sample_details):
    """Mock catalog that answers "matrix" with three fully detailed titles."""
    by_id = {record.imdb_id: record for record in sample_details}
    mock_catalog.search_by_keyword.return_value = CatalogResult.success(sample_summaries)
    mock_catalog.fetch_detail.side_effect = lambda imdb_id: CatalogResult.success(by_id[imdb_id])
    return mock_catalog


@pytest.fixture
def session(matrix_catalog):
    """A search session over the "matrix" catalog."""
    return SearchSession(matrix_catalog, placeholder_poster=PLACEHOLDER)
