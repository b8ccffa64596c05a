"""
Unit tests for SearchEngine: merged search, genre resolution and genre pages.
"""

import pytest

from movie_directory.models import MovieSource
from movie_directory.search_engine import SearchEngine, merge_results, normalize_title

from conftest import make_movie


def remote_movie(movie_id, title, genres=()):
	return make_movie(movie_id, title, genres=list(genres), source=MovieSource.OMDB, provider_id=f'tt{movie_id}')


class StubOMDb:
	"""Records calls and returns canned remote results."""

	def __init__(self, search_results=None, genre_results=None):
		self.search_results = search_results or []
		self.genre_results = genre_results or []
		self.searched = []
		self.genres = []

	def search_by_query(self, query, limit=20):
		self.searched.append((query, limit))
		return list(self.search_results)[:limit]

	def fetch_by_genre(self, genre):
		self.genres.append(genre)
		return list(self.genre_results)


def test_normalize_title():
	assert normalize_title('  Inception ') == 'inception'


def test_merge_results_keeps_local_first():
	local = [make_movie(1, 'Inception')]
	remote = [remote_movie(2, 'inception '), remote_movie(3, 'Memento'), remote_movie(4, 'MEMENTO')]
	merged = merge_results(local, remote)
	assert [m.title for m in merged] == ['Inception', 'Memento']
	assert merged[0].source is MovieSource.LOCAL


def test_search_merges_and_counts(catalog):
	omdb = StubOMDb(search_results=[
		remote_movie(1375666, 'inception '),
		remote_movie(5295990, 'Inception: The Cobol Job'),
	])
	engine = SearchEngine(catalog, omdb, remote_limit=10)

	result = engine.search('  Inception ')
	assert result.query == 'Inception'
	assert result.local_count == 1
	assert result.omdb_count == 2, "remote results counted before de-duplication"
	assert result.total_count == len(result.movies) == 2
	assert [m.title for m in result.movies] == ['Inception', 'Inception: The Cobol Job']
	assert result.movies[0].source is MovieSource.LOCAL
	assert omdb.searched == [('Inception', 10)]


def test_search_with_disabled_remote_is_local_only(catalog):
	engine = SearchEngine(catalog, StubOMDb())
	result = engine.search('nolan')
	assert result.omdb_count == 0
	assert result.local_count == result.total_count == 3


@pytest.mark.parametrize('query', ['', '   ', None])
def test_search_rejects_blank_query(catalog, query):
	with pytest.raises(ValueError, match='Query parameter is required'):
		SearchEngine(catalog, StubOMDb()).search(query)


def test_resolve_genre(catalog):
	engine = SearchEngine(catalog, StubOMDb())
	assert engine.resolve_genre('sciencefiction') == 'Science Fiction'
	assert engine.resolve_genre('science fiction') == 'Science Fiction', "plain genre names resolve"
	assert engine.resolve_genre('50%25-off') == '50%25 Off', "values are decoded once, upstream"
	assert engine.resolve_genre('film-noir') == 'Film Noir', "unknown slugs are title-cased"


def test_movies_by_genre_uses_resolved_name(catalog):
	omdb = StubOMDb(genre_results=[remote_movie(1, 'Unforgiven', ['western'])])
	engine = SearchEngine(catalog, omdb)
	assert [m.title for m in engine.movies_by_genre('western')] == ['Unforgiven']
	engine.movies_by_genre('science-fiction')
	assert omdb.genres == ['Western', 'Science Fiction']


def test_genre_page_uses_local_movies_first(catalog):
	omdb = StubOMDb(genre_results=[remote_movie(1, 'Remote Drama', ['drama'])])
	page = SearchEngine(catalog, omdb).genre_page('science-fiction')
	assert page.known and page.name == 'Science Fiction'
	assert [m.title for m in page.movies] == ['Inception', 'Interstellar', 'The Matrix']
	assert not page.from_remote
	assert omdb.genres == [], "remote not consulted when the catalog has the genre"


def test_genre_page_falls_back_to_remote(catalog):
	omdb = StubOMDb(genre_results=[remote_movie(1, 'Unforgiven', ['western'])])
	page = SearchEngine(catalog, omdb).genre_page('western')
	assert not page.known
	assert page.name == 'Western'
	assert page.from_remote
	assert [m.title for m in page.movies] == ['Unforgiven']
	assert page.suggestion is None


def test_genre_page_suggests_close_genre(catalog):
	page = SearchEngine(catalog, StubOMDb()).genre_page('sciense-fiction')
	assert page.movies == []
	assert not page.from_remote
	assert page.suggestion == 'Science Fiction'
