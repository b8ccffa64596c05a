"""
Catalog module.
Read-only queries over the loaded movies: genre/actor/director/year/decade filters,
the composite filter, top-rated, free-text search, popularity lists,
slug resolution and the deterministic genre image.

Matching contract:
- genres match by exact equality after trim + lowercase
- actors, directors and free-text search match by case-insensitive substring
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

# Import project modules for data structures and helpers
from .models import Movie, MovieFilterOptions  # core data classes
from . import images, ranking, slugs  # url, ordering and slug helpers

# Import loguru for console logging
from loguru import logger  # simple structured logger


def _norm(text: str) -> str:
	return text.strip().lower()


def _has_genre(movie: Movie, normalized_genre: str) -> bool:
	return any(_norm(g) == normalized_genre for g in movie.genres)


def _has_actor(movie: Movie, normalized_actor: str) -> bool:
	return any(normalized_actor in member.name.lower() for member in movie.cast)


def _has_director(movie: Movie, normalized_director: str) -> bool:
	return bool(movie.director) and normalized_director in movie.director.lower()


class MovieCatalog:
	"""
	Immutable, in-memory movie catalog.
	Every query returns a new list; the underlying records are never modified,
	so one instance can serve any number of concurrent requests.
	"""

	def __init__(self, movies: Iterable[Movie]):
		self._movies = tuple(movies)  # frozen snapshot of the dataset
		self._by_id = {m.id: m for m in self._movies}  # id lookup
		self._genre_names = self._canonical_genre_names()  # normalized -> display spelling
		logger.info(f"[Catalog] Ready with {len(self._movies)} movies and {len(self.all_genres())} genres")

	def __len__(self) -> int:
		return len(self._movies)

	def all_movies(self) -> List[Movie]:
		return list(self._movies)

	def by_id(self, movie_id: int) -> Optional[Movie]:
		return self._by_id.get(movie_id)

	# --- enumeration ---------------------------------------------------------

	def _canonical_genre_names(self) -> Dict[str, str]:
		"""
		The dataset is not consistently cased ("Science Fiction" vs "science fiction").
		Each normalized genre is displayed with its most frequent trimmed spelling.
		"""
		spellings: Dict[str, Counter] = {}
		for m in self._movies:
			for g in m.genres:
				if g and g.strip():
					spellings.setdefault(_norm(g), Counter())[g.strip()] += 1
		return {
			key: min(counter.items(), key=lambda item: (-item[1], item[0]))[0]
			for key, counter in spellings.items()
		}

	def all_genres(self) -> List[str]:
		"""Distinct genres (case and whitespace folded), sorted."""
		return sorted(self._genre_names.values())

	def all_actors(self) -> List[str]:
		return sorted({c.name.strip() for m in self._movies for c in m.cast if c.name and c.name.strip()})

	def all_directors(self) -> List[str]:
		return sorted({m.director.strip() for m in self._movies if m.director and m.director.strip()})

	def year_range(self) -> str:
		"""'N/A', a single year, or 'min-max'."""
		years = [m.year for m in self._movies if m.year is not None]
		if not years:
			return 'N/A'
		low, high = min(years), max(years)
		return str(low) if low == high else f'{low}-{high}'

	def popular_genres(self, limit: int = 20) -> List[str]:
		return ranking.most_common(
			(self._genre_names[_norm(g)] for m in self._movies for g in m.genres if g and g.strip()),
			limit,
		)

	def popular_actors(self, limit: int = 20) -> List[str]:
		return ranking.most_common((c.name for m in self._movies for c in m.cast), limit)

	def popular_directors(self, limit: int = 20) -> List[str]:
		return ranking.most_common((m.director for m in self._movies if m.director), limit)

	# --- single-criterion queries -------------------------------------------

	def by_genre(self, genre: str) -> List[Movie]:
		if not genre or not isinstance(genre, str) or not genre.strip():
			return []
		wanted = _norm(genre)
		return [m for m in self._movies if _has_genre(m, wanted)]

	def by_multiple_genres(self, genres: Sequence[str]) -> List[Movie]:
		"""AND: a movie must carry every requested genre."""
		if not genres:
			return []
		wanted = [_norm(g) for g in genres]
		return [m for m in self._movies if all(_has_genre(m, g) for g in wanted)]

	def by_actor(self, actor: str) -> List[Movie]:
		if not actor or not isinstance(actor, str) or not actor.strip():
			return []
		wanted = _norm(actor)
		return [m for m in self._movies if _has_actor(m, wanted)]

	def by_director(self, director: str) -> List[Movie]:
		if not director or not isinstance(director, str) or not director.strip():
			return []
		wanted = _norm(director)
		return [m for m in self._movies if _has_director(m, wanted)]

	def by_year(self, year: int) -> List[Movie]:
		return [m for m in self._movies if m.year == year]

	def by_decade(self, decade: int) -> List[Movie]:
		return [m for m in self._movies if m.decade == decade]

	# --- composite -----------------------------------------------------------

	def filter(self, options: Optional[MovieFilterOptions] = None) -> List[Movie]:
		"""
		Apply every criterion present in `options`; omitted criteria impose no constraint.
		Genres and actors are AND-ed, directors are OR-ed, the rest are plain thresholds.
		"""
		options = options or MovieFilterOptions()
		filtered = list(self._movies)  # source order is preserved throughout

		if options.genres:
			genres = [_norm(g) for g in options.genres]
			filtered = [m for m in filtered if all(_has_genre(m, g) for g in genres)]

		if options.actors:
			actors = [_norm(a) for a in options.actors]
			filtered = [m for m in filtered if all(_has_actor(m, a) for a in actors)]

		if options.directors:
			directors = [_norm(d) for d in options.directors]
			filtered = [m for m in filtered if any(_has_director(m, d) for d in directors)]

		if options.years:
			years = set(options.years)
			filtered = [m for m in filtered if m.year is not None and m.year in years]

		if options.decades:
			decades = set(options.decades)
			filtered = [m for m in filtered if m.decade is not None and m.decade in decades]

		if options.min_rating is not None:
			filtered = [m for m in filtered if m.vote_average >= options.min_rating]

		if options.min_vote_count is not None:
			filtered = [m for m in filtered if m.vote_count >= options.min_vote_count]

		logger.debug(f"[Catalog] filter {options} -> {len(filtered)} movies")
		return filtered

	def top_rated(self, limit: int = 10) -> List[Movie]:
		return sorted(self._movies, key=ranking.top_rated_key)[:max(0, limit)]

	def search(self, query: str) -> List[Movie]:
		"""Substring match over title, overview, director and cast names."""
		if not query or not query.strip():
			return []
		needle = query.strip().lower()
		results = [
			m for m in self._movies
			if needle in m.title.lower()
			or needle in m.overview.lower()
			or (m.director and needle in m.director.lower())
			or any(needle in member.name.lower() for member in m.cast)
		]
		logger.debug(f"[Catalog] search '{needle}' -> {len(results)} local matches")
		return results

	# --- slugs and images ----------------------------------------------------

	def find_genre_by_slug(self, slug: str) -> Optional[str]:
		return slugs.find_genre_by_slug(slug, self.all_genres())

	def suggest_genre(self, slug: str) -> Optional[str]:
		return slugs.suggest_genre(slug, self.all_genres())

	def genre_image(self, genre: str) -> str:
		"""
		Representative image for a genre tile. A pure function of (genre, dataset):
		movies in the genre are ordered by rating, popularity and id, rotated by a
		hash of the genre name, and the first usable poster (then backdrop) wins.
		"""
		candidates = sorted(self.by_genre(genre), key=ranking.genre_image_key)
		if not candidates:
			return images.NO_POSTER

		ordered = ranking.rotate(candidates, ranking.string_hash(genre) % len(candidates))

		for movie in ordered:
			if images.is_placeholder_reference(movie.poster_path):
				continue
			url = images.poster_url(movie.poster_path, 'w500')
			if images.is_usable_image_url(url):
				return url

		for movie in ordered:
			if images.is_placeholder_reference(movie.backdrop_path):
				continue
			url = images.backdrop_url(movie.backdrop_path, 'w780')
			if images.is_usable_image_url(url):
				return url

		logger.debug(f"[Catalog] No usable image for genre '{genre}', using placeholder")
		return images.NO_POSTER
