"""
Shared fixtures: the bundled catalog, small hand-built catalogs, and a fake OMDb HTTP session.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import requests

from movie_directory.catalog import MovieCatalog
from movie_directory.data_loader import DataLoader
from movie_directory.models import CastMember, Movie

ROOT = Path(__file__).resolve().parents[1]
DATA_PATH = ROOT / 'data' / 'movies.json'


def make_movie(movie_id: int, title: str, cast: Optional[List[str]] = None, genres: Optional[List[str]] = None, **fields) -> Movie:
	"""Movie with sensible defaults; cast is given as plain names."""
	year = fields.get('year')
	if year is not None and 'decade' not in fields:
		fields['decade'] = (year // 10) * 10
	return Movie(
		id=movie_id,
		title=title,
		cast=tuple(CastMember(name=name) for name in (cast or [])),
		genres=tuple(genres or []),
		**fields,
	)


@pytest.fixture(scope='session')
def catalog() -> MovieCatalog:
	return MovieCatalog(DataLoader().load_movies(str(DATA_PATH)))


@pytest.fixture
def abc_catalog() -> MovieCatalog:
	"""A (8.5), B (9.2), C (7.0)."""
	return MovieCatalog([
		make_movie(1, 'A', vote_average=8.5, vote_count=100),
		make_movie(2, 'B', vote_average=9.2, vote_count=50),
		make_movie(3, 'C', vote_average=7.0, vote_count=500),
	])


class FakeResponse:
	def __init__(self, payload: Any, status_code: int = 200):
		self._payload = payload
		self.status_code = status_code

	def raise_for_status(self) -> None:
		if self.status_code >= 400:
			raise requests.HTTPError(f"{self.status_code} error")

	def json(self) -> Any:
		if isinstance(self._payload, Exception):
			raise self._payload
		return self._payload


class FakeOMDbSession:
	"""
	Stands in for requests.Session. `searches` maps search text -> list of hits
	(or an Exception to raise); `details` maps imdb id -> detail payload (or an Exception).
	"""

	def __init__(self, searches: Dict[str, Any], details: Dict[str, Any]):
		self.searches = searches
		self.details = details
		self.calls: List[Dict[str, str]] = []

	def get(self, url: str, params: Dict[str, str], timeout: float) -> FakeResponse:
		self.calls.append(dict(params))
		if 's' in params:
			result = self.searches.get(params['s'])
			if isinstance(result, Exception):
				raise result
			if result is None:
				return FakeResponse({'Response': 'False', 'Error': 'Movie not found!'})
			return FakeResponse({'Response': 'True', 'Search': result})
		result = self.details.get(params['i'])
		if isinstance(result, Exception):
			raise result
		if result is None:
			return FakeResponse({'Response': 'False', 'Error': 'Incorrect IMDb ID.'})
		if isinstance(result, FakeResponse):
			return result
		return FakeResponse(dict(result, Response='True'))

	@property
	def detail_calls(self) -> int:
		return sum(1 for c in self.calls if 'i' in c)


def omdb_hit(imdb_id: str, title: str) -> Dict[str, str]:
	return {'imdbID': imdb_id, 'Title': title, 'Type': 'movie', 'Year': '2000'}


def omdb_detail(imdb_id: str, title: str, genre: str = 'Drama', **overrides) -> Dict[str, str]:
	detail = {
		'imdbID': imdb_id,
		'Title': title,
		'Year': '2010',
		'Released': '16 Jul 2010',
		'Runtime': '148 min',
		'Genre': genre,
		'Director': 'Christopher Nolan',
		'Actors': 'Leonardo DiCaprio, Joseph Gordon-Levitt, Elliot Page',
		'Plot': 'A thief who steals corporate secrets through dream-sharing technology.',
		'Language': 'English, Japanese',
		'Poster': 'https://m.media-amazon.com/images/M/poster.jpg',
		'imdbRating': '8.8',
		'imdbVotes': '2,345,678',
		'Production': 'N/A',
	}
	detail.update(overrides)
	return detail
