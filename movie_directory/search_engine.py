"""
Search engine module.
Combines the local catalog with OMDb enrichment: merged free-text search
and genre pages that fall back to remote results when the catalog lacks a genre.
"""

from typing import List, Optional

# Import project modules for data structures and components
from .catalog import MovieCatalog  # local query engine
from .models import CombinedSearchResult, GenrePage, Movie  # core data classes
from .omdb_client import OMDbClient  # remote enrichment
from .slugs import slug_to_genre  # display fallback for unknown slugs

# Import loguru for console logging
from loguru import logger  # simple structured logger


def normalize_title(title: str) -> str:
	"""Key used to de-duplicate results across sources."""
	return title.strip().lower()


def merge_results(local: List[Movie], remote: List[Movie]) -> List[Movie]:
	"""
	Local results first, then remote results whose normalized title is not
	already present. Remote duplicates of each other are dropped too.
	"""
	merged = list(local)  # local results always win
	seen = {normalize_title(m.title) for m in local}  # titles already present
	for movie in remote:
		key = normalize_title(movie.title)
		if key in seen:
			continue  # duplicate of a result already kept
		seen.add(key)
		merged.append(movie)
	return merged


class SearchEngine:
	"""
	High-level search API over the local catalog and the OMDb client.
	Remote failures never surface here: the client already degrades to empty lists.
	"""
	def __init__(self, catalog: MovieCatalog, omdb: OMDbClient, remote_limit: int = 10):
		self.catalog = catalog  # authoritative local data
		self.omdb = omdb  # best-effort enrichment
		self.remote_limit = remote_limit  # cap on remote search hits

	def search(self, query: str) -> CombinedSearchResult:
		"""Run local and remote search and merge them. Blank queries are rejected."""
		if not query or not query.strip():  # empty input guard
			raise ValueError("Query parameter is required")

		q = query.strip()  # normalize spaces
		local = self.catalog.search(q)  # substring search over the dataset
		remote = self.omdb.search_by_query(q, self.remote_limit)  # [] when disabled or failing
		movies = merge_results(local, remote)

		logger.info(
			f"[Engine] search '{q}' | local={len(local)} omdb={len(remote)} total={len(movies)}"
		)
		return CombinedSearchResult(
			query=q,
			local_count=len(local),
			omdb_count=len(remote),
			total_count=len(movies),
			movies=movies,
		)

	def resolve_genre(self, genre_slug: str) -> str:
		"""Authoritative genre name for a slug, or a capitalized best guess."""
		slug = genre_slug.strip()  # already percent-decoded by the caller
		return self.catalog.find_genre_by_slug(slug) or slug_to_genre(slug)

	def movies_by_genre(self, genre_slug: str) -> List[Movie]:
		"""Remote-only genre lookup, used when the catalog has nothing for the genre."""
		genre = self.resolve_genre(genre_slug)
		logger.debug(f"[Engine] movies_by_genre slug='{genre_slug}' -> genre='{genre}'")
		return self.omdb.fetch_by_genre(genre)

	def genre_page(self, genre_slug: str) -> GenrePage:
		"""Local movies for a genre, falling back to OMDb only when there are none."""
		slug = genre_slug.strip()
		known_name: Optional[str] = self.catalog.find_genre_by_slug(slug)
		name = known_name or slug_to_genre(slug)

		movies = self.catalog.by_genre(name)
		from_remote = False
		if not movies:
			movies = self.omdb.fetch_by_genre(name)
			from_remote = bool(movies)

		suggestion = None
		if not movies and known_name is None:
			suggestion = self.catalog.suggest_genre(slug)  # "did you mean" hint

		logger.info(
			f"[Engine] genre page '{slug}' -> '{name}' | movies={len(movies)} remote={from_remote}"
		)
		return GenrePage(
			slug=slug,
			name=name,
			known=known_name is not None,
			movies=movies,
			from_remote=from_remote,
			suggestion=suggestion,
		)
