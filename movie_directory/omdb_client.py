"""
OMDb enrichment client.
Fills in movies for genres missing from the local dataset and broadens free-text search.

Every public method fails soft: network errors, bad payloads and a missing API key
all end in an empty (or shorter) list, because callers always have the local catalog.
Requests are sequential with a fixed delay before each detail lookup (rate limit).
"""

import re
import time
import zlib
from typing import Any, Callable, Dict, List, Optional

import requests
from loguru import logger

from .exceptions import OMDbError
from .models import CastMember, Movie, MovieSource

NOT_AVAILABLE = 'N/A'

MAX_SEARCH_TERMS = 2  # terms tried per genre
MAX_DETAILS_PER_TERM = 20  # detail lookups per search page
MAX_GENRE_RESULTS = 12  # stop once this many genre matches are found
MAX_CAST = 5

# Free-text search terms per genre; unknown genres search for their own name
GENRE_SEARCH_TERMS: Dict[str, List[str]] = {
	'drama': ['drama', 'emotional', 'serious'],
	'action': ['action', 'thriller', 'adventure'],
	'comedy': ['comedy', 'funny', 'humor'],
	'horror': ['horror', 'scary', 'thriller'],
	'romance': ['romance', 'love', 'romantic'],
	'sci-fi': ['sci-fi', 'science fiction', 'space'],
	'science fiction': ['sci-fi', 'science fiction', 'space'],
	'thriller': ['thriller', 'suspense', 'mystery'],
	'fantasy': ['fantasy', 'magic', 'wizard'],
	'animation': ['animation', 'animated', 'cartoon'],
	'crime': ['crime', 'gangster', 'mafia'],
	'documentary': ['documentary', 'documentary film'],
	'family': ['family', 'kids', 'children'],
	'mystery': ['mystery', 'detective', 'investigation'],
	'war': ['war', 'military', 'soldier'],
	'western': ['western', 'cowboy', 'frontier'],
	'musical': ['musical', 'music', 'song'],
	'sport': ['sport', 'sports', 'athlete'],
	'biography': ['biography', 'biographical', 'true story'],
	'history': ['history', 'historical', 'period'],
	'adventure': ['adventure', 'journey', 'quest'],
}

_SCI_FI_NAMES = {'sci-fi', 'science fiction'}
_LEADING_NUMBER = re.compile(r'\d+')


# Field parsers: None means "not available", the mapper decides the default.

def _available(value: Any) -> Optional[str]:
	if value is None:
		return None
	text = str(value).strip()
	if not text or text == NOT_AVAILABLE:
		return None
	return text


def parse_rating(value: Any) -> Optional[float]:
	"""'8.8' -> 8.8; 'N/A', garbage and non-finite values -> None."""
	text = _available(value)
	if text is None:
		return None
	try:
		rating = float(text)
	except ValueError:
		return None
	if rating != rating or rating in (float('inf'), float('-inf')):
		return None
	return rating


def parse_vote_count(value: Any) -> Optional[int]:
	"""'2,345,678' -> 2345678."""
	text = _available(value)
	if text is None:
		return None
	try:
		return int(text.replace(',', ''))
	except ValueError:
		return None


def parse_runtime(value: Any) -> Optional[int]:
	"""'148 min' -> 148."""
	text = _available(value)
	if text is None:
		return None
	match = _LEADING_NUMBER.match(text)
	return int(match.group(0)) if match else None


def parse_year(value: Any) -> Optional[int]:
	"""'2010' -> 2010; series ranges like '2008–2013' keep the first year."""
	text = _available(value)
	if text is None:
		return None
	match = _LEADING_NUMBER.match(text.split('–')[0].split('-')[0].strip())
	return int(match.group(0)) if match else None


def parse_list(value: Any) -> List[str]:
	"""'Drama, Sci-Fi' -> ['Drama', 'Sci-Fi']."""
	text = _available(value)
	if text is None:
		return []
	return [part.strip() for part in text.split(',') if part.strip()]


def synthesize_id(provider_id: str) -> int:
	"""
	Numeric id from an imdb id ('tt1375666' -> 1375666). Ids without digits get a
	CRC32 of the provider id, stable across runs. Only unique within OMDb records.
	"""
	digits = provider_id[2:] if provider_id.startswith('tt') else provider_id
	if digits.isdigit():
		return int(digits)
	return zlib.crc32(provider_id.encode('utf-8'))


def genre_matches(requested: str, movie_genres: List[str]) -> bool:
	"""Equality or containment in either direction, plus sci-fi == science fiction."""
	wanted = requested.strip().lower()
	for genre in movie_genres:
		g = genre.strip().lower()
		if g == wanted or wanted in g or g in wanted:
			return True
		if wanted in _SCI_FI_NAMES and (g in _SCI_FI_NAMES or 'sci-fi' in g or 'science fiction' in g):
			return True
	return False


def search_terms_for(genre: str) -> List[str]:
	normalized = genre.strip().lower()
	return GENRE_SEARCH_TERMS.get(normalized, [normalized])[:MAX_SEARCH_TERMS]


def map_detail(detail: Dict[str, Any], fallback_title: str = '', lowercase_genres: bool = False) -> Movie:
	"""Translate an OMDb detail payload into a Movie record."""
	provider_id = str(detail.get('imdbID') or '')
	year = parse_year(detail.get('Year'))
	genres = parse_list(detail.get('Genre'))
	if lowercase_genres:
		genres = [g.lower() for g in genres]
	poster = _available(detail.get('Poster'))
	languages = parse_list(detail.get('Language'))

	return Movie(
		id=synthesize_id(provider_id),
		title=detail.get('Title') or fallback_title,
		tagline='',
		overview=_available(detail.get('Plot')) or '',
		release_date=_available(detail.get('Released')) or _available(detail.get('Year')) or '',
		year=year,
		decade=(year // 10) * 10 if year is not None else None,
		vote_average=parse_rating(detail.get('imdbRating')) or 0.0,
		vote_count=parse_vote_count(detail.get('imdbVotes')) or 0,
		popularity=0.0,
		runtime=parse_runtime(detail.get('Runtime')) or 0,
		budget=0,
		revenue=0,
		original_language=languages[0] if languages else 'en',
		status='Released',
		genres=tuple(genres),
		keywords=(),
		production_companies=tuple(parse_list(detail.get('Production'))),
		poster_path=poster,
		backdrop_path=poster,
		cast=tuple(CastMember(name=name) for name in parse_list(detail.get('Actors'))[:MAX_CAST]),
		director=_available(detail.get('Director')),
		source=MovieSource.OMDB,
		provider_id=provider_id or None,
	)


class OMDbClient:
	"""
	Thin OMDb wrapper: title search (s=...) plus lookup by id (i=...).
	A blank API key disables the client.
	"""

	def __init__(
		self,
		api_key: str,
		base_url: str = 'https://www.omdbapi.com/',
		request_delay: float = 0.2,
		timeout: float = 10.0,
		session: Optional[requests.Session] = None,
		sleep: Callable[[float], None] = time.sleep,
	):
		self.api_key = (api_key or '').strip()
		self.base_url = base_url
		self.request_delay = request_delay
		self.timeout = timeout
		self.session = session or requests.Session()
		self._sleep = sleep

	@property
	def enabled(self) -> bool:
		return bool(self.api_key)

	def _get_json(self, params: Dict[str, str]) -> Dict[str, Any]:
		"""One GET against the API. Raises OMDbError for anything but a successful payload."""
		query = dict(params, apikey=self.api_key)
		try:
			response = self.session.get(self.base_url, params=query, timeout=self.timeout)
			response.raise_for_status()
			data = response.json()
		except requests.RequestException as e:
			raise OMDbError(f"request failed: {e}", url=self.base_url) from e
		except ValueError as e:  # body is not JSON
			raise OMDbError(f"malformed payload: {e}", url=self.base_url) from e

		if not isinstance(data, dict):
			raise OMDbError("payload is not an object", url=self.base_url)
		if data.get('Response') != 'True':
			raise OMDbError(data.get('Error') or 'Response=False', url=self.base_url)
		return data

	def _search(self, text: str) -> List[Dict[str, Any]]:
		data = self._get_json({'s': text, 'type': 'movie', 'page': '1'})
		hits = data.get('Search') or []
		return [hit for hit in hits if isinstance(hit, dict) and hit.get('imdbID')]

	def _detail(self, imdb_id: str) -> Dict[str, Any]:
		self._sleep(self.request_delay)  # throttle before every detail lookup
		return self._get_json({'i': imdb_id})

	def fetch_by_genre(self, genre: str) -> List[Movie]:
		"""Up to 12 OMDb movies whose genres match `genre`."""
		if not self.enabled:
			logger.warning("[OMDb] OMDB_API_KEY not set, cannot fetch from OMDb")
			return []
		if not genre or not genre.strip():
			return []
		try:
			return self._collect_genre(genre)
		except Exception:
			logger.exception(f"[OMDb] Unexpected error fetching genre '{genre}'")
			return []

	def search_by_query(self, query: str, limit: int = 20) -> List[Movie]:
		"""Up to `limit` OMDb movies for a free-text title search."""
		if not self.enabled:
			logger.warning("[OMDb] OMDB_API_KEY not set, cannot fetch from OMDb")
			return []
		if not query or not query.strip():
			return []
		try:
			return self._collect_query(query.strip(), limit)
		except Exception:
			logger.exception(f"[OMDb] Unexpected error searching '{query}'")
			return []

	def _collect_genre(self, genre: str) -> List[Movie]:
		movies: List[Movie] = []
		for term in search_terms_for(genre):
			try:
				hits = self._search(term)
			except OMDbError as e:
				logger.error(f"[OMDb] Search for genre '{genre}' with term '{term}' failed: {e}")
				continue  # try the next term

			for hit in hits[:MAX_DETAILS_PER_TERM]:
				imdb_id = hit['imdbID']
				try:
					detail = self._detail(imdb_id)
					movie = map_detail(detail, fallback_title=hit.get('Title', ''), lowercase_genres=True)
				except (OMDbError, TypeError, ValueError) as e:
					logger.error(f"[OMDb] Error fetching details for {imdb_id}: {e}")
					continue

				if genre_matches(genre, list(movie.genres)):
					movies.append(movie)
					if len(movies) >= MAX_GENRE_RESULTS:
						break

			if len(movies) >= MAX_GENRE_RESULTS:
				break

		logger.info(f"[OMDb] Genre '{genre}' -> {len(movies)} movies")
		return movies

	def _collect_query(self, query: str, limit: int) -> List[Movie]:
		try:
			hits = self._search(query)
		except OMDbError as e:
			logger.error(f"[OMDb] Search for query '{query}' failed: {e}")
			return []

		movies: List[Movie] = []
		for hit in hits[:max(0, limit)]:
			imdb_id = hit['imdbID']
			try:
				detail = self._detail(imdb_id)
				movies.append(map_detail(detail, fallback_title=hit.get('Title', '')))
			except (OMDbError, TypeError, ValueError) as e:
				logger.error(f"[OMDb] Error fetching details for {imdb_id}: {e}")
				continue

		logger.info(f"[OMDb] Query '{query.strip()}' -> {len(movies)} movies")
		return movies
